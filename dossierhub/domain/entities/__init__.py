"""Domain entities: lifecycle rules for uploads and dossiers.

Pure domain rules; no ORM or persistence concerns.
"""

from dossierhub.domain.entities.document_upload import (
    DECIDABLE_UPLOAD_STATUSES,
    UPLOAD_TRANSITIONS,
    VALID_UPLOAD_STATUSES,
    can_transition,
    ensure_upload_transition,
)
from dossierhub.domain.entities.dossier import ensure_finalizable, ensure_not_finalized

__all__ = [
    "DECIDABLE_UPLOAD_STATUSES",
    "UPLOAD_TRANSITIONS",
    "VALID_UPLOAD_STATUSES",
    "can_transition",
    "ensure_finalizable",
    "ensure_not_finalized",
    "ensure_upload_transition",
]
