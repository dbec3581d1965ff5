"""File storage adapters implementing IFileStore."""

from dossierhub.infrastructure.external.storage.local_file_store import LocalFileStore

__all__ = ["LocalFileStore"]
