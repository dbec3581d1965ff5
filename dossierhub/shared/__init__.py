"""Shared helpers used across layers (logging, time, identifiers)."""
