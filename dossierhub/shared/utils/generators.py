"""Primary key generation for dossiers, requests, uploads and templates."""

from cuid2 import cuid_wrapper

cuid_generator = cuid_wrapper()


def generate_cuid() -> str:
    """New CUID2 string id."""
    return str(cuid_generator())
