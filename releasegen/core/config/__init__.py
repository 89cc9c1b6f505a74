"""Configuration loading — release.yml and the category allow-list."""
