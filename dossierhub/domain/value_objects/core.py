"""Domain value objects for dossier collection.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.
"""

import os
from dataclasses import dataclass

from dossierhub.domain.exceptions import ValidationException

_ANY_FORMAT = "*"
_BYTES_PER_MB = 1024 * 1024


@dataclass(frozen=True)
class QuantityRange:
    """Minimum/maximum number of uploads a document request expects.

    Invariant: 1 <= minimum <= maximum.
    """

    minimum: int
    maximum: int

    def __post_init__(self) -> None:
        if self.minimum < 1:
            raise ValidationException(
                "Minimum quantity must be at least 1", field="quantite_min"
            )
        if self.maximum < self.minimum:
            raise ValidationException(
                "Maximum quantity must be greater than or equal to minimum quantity",
                field="quantite_max",
            )


@dataclass(frozen=True)
class FileRef:
    """Reference to a file held by the file store. Bytes are never held here."""

    id: str
    name: str
    size: int
    mime_type: str

    def __post_init__(self) -> None:
        if not self.id:
            raise ValidationException("File reference id is required", field="file_id")
        if not self.name:
            raise ValidationException("File name is required", field="file_name")
        if self.size < 0:
            raise ValidationException("File size cannot be negative", field="file_size")

    @property
    def extension(self) -> str:
        """Lowercase extension without the dot ('' when the name has none)."""
        return os.path.splitext(self.name)[1].lstrip(".").lower()


@dataclass(frozen=True)
class AcceptedFormats:
    """Accepted file extensions for a request, parsed from e.g. 'PDF,JPG,PNG'.

    '*' (or an empty value) accepts any file.
    """

    raw: str = _ANY_FORMAT

    @property
    def extensions(self) -> frozenset[str]:
        parts = (p.strip().lstrip(".").lower() for p in (self.raw or "").split(","))
        return frozenset(p for p in parts if p)

    def accepts_any(self) -> bool:
        exts = self.extensions
        return not exts or _ANY_FORMAT in exts

    def accepts(self, file: FileRef) -> bool:
        """Return True when the file's extension is allowed."""
        return self.accepts_any() or file.extension in self.extensions

    @staticmethod
    def size_allowed(file: FileRef, max_size_mb: float | None) -> bool:
        """Return True when max_size_mb is unset or the file fits under it."""
        if max_size_mb is None:
            return True
        return file.size <= max_size_mb * _BYTES_PER_MB
