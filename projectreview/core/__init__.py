"""Core workflow logic for project review."""
