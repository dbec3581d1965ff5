"""Local filesystem file store with path validation and atomic writes."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import BinaryIO

import aiofiles
import aiofiles.os

from dossierhub.domain.value_objects import FileRef
from dossierhub.infrastructure.exceptions import (
    StorageDeleteError,
    StoragePermissionError,
    StorageUploadError,
)
from dossierhub.shared.utils.generators import generate_cuid


class LocalFileStore:
    """IFileStore on the local filesystem.

    Files are stored as <storage_root>/<id[:2]>/<id><ext>. Writes use temp file + rename
    so a crashed write never leaves a partial file under its final name.
    """

    def __init__(self, storage_root: str) -> None:
        self.storage_root = Path(storage_root).resolve()
        self.storage_root.mkdir(parents=True, exist_ok=True, mode=0o750)

    def _get_full_path(self, storage_ref: str) -> Path:
        """Resolve and validate path under storage_root. Raises StoragePermissionError if traversal."""
        full_path = (self.storage_root / storage_ref).resolve()
        try:
            full_path.relative_to(self.storage_root)
        except ValueError as e:
            raise StoragePermissionError(storage_ref, "path_validation") from e
        return full_path

    @staticmethod
    def _storage_ref(file_id: str) -> str:
        return f"{file_id[:2]}/{file_id}"

    def _find(self, file_id: str) -> Path | None:
        directory = self._get_full_path(self._storage_ref(file_id)).parent
        if not directory.is_dir():
            return None
        for candidate in directory.iterdir():
            if candidate.stem == file_id:
                return candidate
        return None

    async def save(self, file_data: BinaryIO, filename: str, mime_type: str) -> FileRef:
        """Store bytes atomically; return the FileRef recorded on the upload."""
        file_id = generate_cuid()
        suffix = Path(filename).suffix.lower()
        storage_ref = self._storage_ref(file_id) + suffix
        try:
            target_path = self._get_full_path(storage_ref)
            target_path.parent.mkdir(parents=True, exist_ok=True, mode=0o750)
            content = file_data.read()
            temp_fd, temp_path = tempfile.mkstemp(
                dir=target_path.parent, prefix=".tmp_", suffix=suffix
            )
            os.close(temp_fd)
            try:
                async with aiofiles.open(temp_path, "wb") as f:
                    await f.write(content)
                os.chmod(temp_path, 0o640)
                os.rename(temp_path, target_path)
            finally:
                if Path(temp_path).exists():
                    os.unlink(temp_path)
        except StoragePermissionError:
            raise
        except OSError as e:
            raise StorageUploadError(storage_ref, str(e)) from e
        return FileRef(
            id=file_id,
            name=Path(filename).name or file_id,
            size=len(content),
            mime_type=mime_type or "application/octet-stream",
        )

    async def delete(self, file_id: str) -> bool:
        """Delete stored bytes. Returns True if deleted, False if not found."""
        try:
            path = self._find(file_id)
            if path is None:
                return False
            await aiofiles.os.remove(path)
            return True
        except OSError as e:
            raise StorageDeleteError(file_id, str(e)) from e
