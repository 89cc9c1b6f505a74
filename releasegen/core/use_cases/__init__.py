"""Use cases — top-level orchestration called by the CLI."""
