"""Quota guard: how many new uploads a document request may accept right now.

Single source of truth for quota arithmetic and the "close to maximum"
hint; every surface consumes these functions instead of recomputing.
Pure functions over a request snapshot. Callers that append uploads must
evaluate and append under the request's write lock.
"""

from __future__ import annotations

from collections.abc import Iterable

from dossierhub.application.dtos.dossier import DocumentRequestResult, DocumentUploadResult
from dossierhub.application.dtos.upload import QuotaDecision, QuotaHint
from dossierhub.domain.entities.document_upload import VALID_UPLOAD_STATUSES
from dossierhub.domain.enums import UploadStatus
from dossierhub.domain.exceptions import QuotaExceededException, ValidationException

HINT_OK = "ok"
HINT_NEAR_LIMIT = "near_limit"
HINT_AT_LIMIT = "at_limit"
HINT_REPLACEMENTS = "replacements_available"


def valid_upload_count(uploads: Iterable[DocumentUploadResult]) -> int:
    """Count uploads that occupy quota (PENDING, IN_REVIEW, APPROVED)."""
    return sum(1 for u in uploads if u.status in VALID_UPLOAD_STATUSES)


def refused_uploads(uploads: Iterable[DocumentUploadResult]) -> list[DocumentUploadResult]:
    """Return REJECTED (not yet REPLACED) uploads, oldest first."""
    refused = [u for u in uploads if u.status == UploadStatus.REJECTED]
    return sorted(refused, key=lambda u: (u.submitted_at, u.sequence))


def available_slots(request: DocumentRequestResult) -> int:
    """max(0, quantite_max - valid uploads)."""
    return max(0, request.quantite_max - valid_upload_count(request.uploads))


def _acceptance_cap(request: DocumentRequestResult, refused_count: int) -> int:
    slots = available_slots(request)
    if refused_count == 0:
        return slots
    # Rejected uploads already left the valid count, so their slot is part of
    # `slots`; the clamp keeps valid uploads <= quantite_max after replacement.
    headroom = request.quantite_max - valid_upload_count(request.uploads)
    return max(0, min(refused_count + slots, headroom))


def evaluate_quota(request: DocumentRequestResult, requested_count: int) -> QuotaDecision:
    """Compute how many of requested_count uploads are accepted and which they replace.

    Never raises for quota; the decision carries `exceeded` and `reason`.

    Raises:
        ValidationException: If requested_count < 1.
    """
    if requested_count < 1:
        raise ValidationException("At least one file must be submitted", field="files")
    refused = refused_uploads(request.uploads)
    cap = _acceptance_cap(request, len(refused))
    if requested_count > cap:
        return QuotaDecision(
            request_id=request.id,
            requested=requested_count,
            allowed=cap,
            replacing=(),
            reason=(
                f"{requested_count} file(s) submitted but only {cap} accepted "
                f"({len(refused)} replaceable, {available_slots(request)} free)"
            ),
        )
    replace_count = min(requested_count, len(refused))
    return QuotaDecision(
        request_id=request.id,
        requested=requested_count,
        allowed=requested_count,
        replacing=tuple(u.id for u in refused[:replace_count]),
    )


def can_accept(request: DocumentRequestResult, requested_count: int) -> QuotaDecision:
    """Like evaluate_quota, but raise when the request cannot take requested_count uploads.

    Raises:
        QuotaExceededException: allowed = number of uploads the request accepts now.
        ValidationException: If requested_count < 1.
    """
    decision = evaluate_quota(request, requested_count)
    if decision.exceeded:
        raise QuotaExceededException(request.id, decision.allowed, requested_count)
    return decision


def quota_hint(request: DocumentRequestResult, warning_remaining: int = 1) -> QuotaHint:
    """Summarize quota for display before submission.

    Levels, first match wins: at_limit (nothing accepted), near_limit (at most
    warning_remaining free slots), replacements_available (rejected uploads
    can be replaced), ok.
    """
    valid = valid_upload_count(request.uploads)
    refused = refused_uploads(request.uploads)
    slots = available_slots(request)
    cap = _acceptance_cap(request, len(refused))
    if cap == 0:
        level = HINT_AT_LIMIT
        message = f"Maximum of {request.quantite_max} document(s) reached for this request."
    elif slots <= warning_remaining and not refused:
        level = HINT_NEAR_LIMIT
        message = (
            f"Only {slots} more document(s) can be added "
            f"({valid}/{request.quantite_max} submitted)."
        )
    elif refused:
        level = HINT_REPLACEMENTS
        message = (
            f"{len(refused)} rejected document(s) can be replaced; "
            f"up to {cap} file(s) accepted."
        )
    else:
        level = HINT_OK
        message = None
    return QuotaHint(
        request_id=request.id,
        valid_count=valid,
        refused_count=len(refused),
        available_slots=slots,
        max_acceptable=cap,
        level=level,
        message=message,
    )
