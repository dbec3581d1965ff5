"""Request status deriver: a document request's status from its upload ledger.

Pure and idempotent; the stored status is only ever the output of this function.
"""

from dataclasses import replace
from datetime import datetime

from dossierhub.application.dtos.dossier import (
    DocumentRequestResult,
    DocumentUploadResult,
    DossierResult,
)
from dossierhub.domain.entities.document_upload import DECIDABLE_UPLOAD_STATUSES
from dossierhub.domain.enums import DossierStatus, RequestStatus, UploadStatus
from dossierhub.shared.utils.datetime import ensure_utc


def _approved_in_time(upload: DocumentUploadResult, due: datetime | None) -> bool:
    """APPROVED, and decided no later than the due date (when there is one)."""
    if upload.status != UploadStatus.APPROVED:
        return False
    decided = ensure_utc(upload.decided_at)
    return due is None or decided is None or decided <= due


def approved_upload_count(request: DocumentRequestResult) -> int:
    """Approvals that count toward the request; late approvals do not."""
    due = ensure_utc(request.due_date)
    return sum(1 for u in request.uploads if _approved_in_time(u, due))


def is_request_approved(request: DocumentRequestResult) -> bool:
    """At least quantite_min uploads were APPROVED by the due date."""
    return approved_upload_count(request) >= request.quantite_min


def is_past_due(request: DocumentRequestResult, now: datetime) -> bool:
    due = ensure_utc(request.due_date)
    return due is not None and due < ensure_utc(now)


def derive_request_status(request: DocumentRequestResult, now: datetime) -> RequestStatus:
    """Derive the request status.

    Precedence: APPROVED (quantite_min approved by the due date), EXPIRED (past
    due without approval), REJECTED_NEEDS_REPLACEMENT (nothing awaiting review
    and at least one rejection outstanding), RECEIVED (some valid upload),
    AWAITING.

    An approval decided after the due date never turns an EXPIRED request
    into APPROVED.

    Args:
        request: Request snapshot with its uploads.
        now: Reference time for the due-date check.

    Returns:
        The derived RequestStatus.
    """
    if is_request_approved(request):
        return RequestStatus.APPROVED
    if is_past_due(request, now):
        return RequestStatus.EXPIRED
    awaiting_review = sum(
        1 for u in request.uploads if u.status in DECIDABLE_UPLOAD_STATUSES
    )
    rejected = sum(1 for u in request.uploads if u.status == UploadStatus.REJECTED)
    # Approved uploads below quantite_min do not block this: the client still has
    # to replace the rejected file before the request can reach its minimum.
    if awaiting_review == 0 and rejected > 0:
        return RequestStatus.REJECTED_NEEDS_REPLACEMENT
    if awaiting_review + approved_upload_count(request) > 0:
        return RequestStatus.RECEIVED
    return RequestStatus.AWAITING


def with_current_request_statuses(dossier: DossierResult, now: datetime) -> DossierResult:
    """Return the dossier with each request status re-derived at now.

    Expiry depends on the clock, so a stored status can lag behind until the next
    mutation. A VALIDATED dossier is an archived snapshot and is returned as is.
    """
    if dossier.status == DossierStatus.VALIDATED:
        return dossier
    requests = []
    changed = False
    for request in dossier.requests:
        status = derive_request_status(request, now)
        if status != request.status:
            request = replace(request, status=status)
            changed = True
        requests.append(request)
    if not changed:
        return dossier
    return replace(dossier, requests=requests)
