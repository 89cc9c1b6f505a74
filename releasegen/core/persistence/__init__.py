"""Atomic JSON file output."""
