"""Domain enumerations for dossier collection.

Canonical status vocabularies shared by every surface. Upload-level
REJECTED (one submission's outcome) and request-level
REJECTED_NEEDS_REPLACEMENT (aggregate condition) are distinct concepts.
"""

from enum import Enum


class _ValuesMixin:
    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings (e.g. for validation or serialization)."""
        return [member.value for member in cls]  # type: ignore[attr-defined]


class DossierStatus(_ValuesMixin, str, Enum):
    """Dossier lifecycle status.

    PENDING, IN_PROGRESS and COMPLETE are derived from the requests;
    VALIDATED is set only by finalization and is terminal.
    """

    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETE = "COMPLETE"
    VALIDATED = "VALIDATED"


class RequestStatus(_ValuesMixin, str, Enum):
    """Document request status, always derived from the request's upload ledger."""

    AWAITING = "AWAITING"
    RECEIVED = "RECEIVED"
    APPROVED = "APPROVED"
    REJECTED_NEEDS_REPLACEMENT = "REJECTED_NEEDS_REPLACEMENT"
    EXPIRED = "EXPIRED"


class UploadStatus(_ValuesMixin, str, Enum):
    """Status of a single submitted file. Moves forward only."""

    PENDING = "PENDING"
    IN_REVIEW = "IN_REVIEW"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    REPLACED = "REPLACED"


class UploadDecision(_ValuesMixin, str, Enum):
    """Accountant decision on an upload."""

    APPROVE = "APPROVE"
    REJECT = "REJECT"

    @property
    def target_status(self) -> UploadStatus:
        """Upload status this decision leads to."""
        if self is UploadDecision.APPROVE:
            return UploadStatus.APPROVED
        return UploadStatus.REJECTED


class NotificationKind(_ValuesMixin, str, Enum):
    """Status transitions reported to the notification dispatcher."""

    UPLOAD_SUBMITTED = "UPLOAD_SUBMITTED"
    UPLOAD_APPROVED = "UPLOAD_APPROVED"
    UPLOAD_REJECTED = "UPLOAD_REJECTED"
    DOSSIER_COMPLETED = "DOSSIER_COMPLETED"
    DOSSIER_FINALIZED = "DOSSIER_FINALIZED"
    DUE_DATE_APPROACHING = "DUE_DATE_APPROACHING"


class ActorRole(_ValuesMixin, str, Enum):
    """Role of the authenticated caller (resolved by the identity service)."""

    CLIENT = "client"
    ACCOUNTANT = "accountant"
