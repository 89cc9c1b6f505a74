"""Core pipeline: config, models, services, persistence, use cases."""
