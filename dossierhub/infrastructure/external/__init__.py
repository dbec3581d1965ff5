"""Adapters for external resources (file storage)."""
