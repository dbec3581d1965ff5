"""Document upload state machine.

PENDING -> IN_REVIEW -> APPROVED | REJECTED, PENDING -> APPROVED | REJECTED,
REJECTED -> REPLACED. APPROVED and REPLACED are terminal; nothing moves backward.
"""

from dossierhub.domain.enums import UploadStatus
from dossierhub.domain.exceptions import InvalidStateTransitionException

# Uploads that count against quantiteMax.
VALID_UPLOAD_STATUSES: frozenset[UploadStatus] = frozenset(
    {UploadStatus.PENDING, UploadStatus.IN_REVIEW, UploadStatus.APPROVED}
)

# Uploads an accountant may still approve or reject.
DECIDABLE_UPLOAD_STATUSES: frozenset[UploadStatus] = frozenset(
    {UploadStatus.PENDING, UploadStatus.IN_REVIEW}
)

UPLOAD_TRANSITIONS: dict[UploadStatus, frozenset[UploadStatus]] = {
    UploadStatus.PENDING: frozenset(
        {UploadStatus.IN_REVIEW, UploadStatus.APPROVED, UploadStatus.REJECTED}
    ),
    UploadStatus.IN_REVIEW: frozenset({UploadStatus.APPROVED, UploadStatus.REJECTED}),
    UploadStatus.REJECTED: frozenset({UploadStatus.REPLACED}),
    UploadStatus.APPROVED: frozenset(),
    UploadStatus.REPLACED: frozenset(),
}


def can_transition(current: UploadStatus, target: UploadStatus) -> bool:
    """Return whether an upload may move from current to target."""
    return target in UPLOAD_TRANSITIONS[current]


def ensure_upload_transition(current: UploadStatus, target: UploadStatus) -> None:
    """Raise InvalidStateTransitionException unless current -> target is allowed."""
    if not can_transition(current, target):
        raise InvalidStateTransitionException(
            "document_upload", current.value, target.value
        )
