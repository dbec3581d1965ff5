"""Security: identity tokens."""
