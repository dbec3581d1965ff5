"""Progress aggregator: per-dossier completion counters and status.

A side-effect-free fold over the dossier's requests; no external calls.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from dossierhub.application.dtos.dossier import DocumentRequestResult, DossierResult
from dossierhub.application.dtos.progress import DossierProgress
from dossierhub.application.services.quota_guard import valid_upload_count
from dossierhub.application.services.request_status_deriver import is_request_approved
from dossierhub.domain.enums import DossierStatus


def request_contribution(request: DocumentRequestResult) -> int:
    """min(valid uploads, quantite_min): extra submissions do not inflate progress."""
    return min(valid_upload_count(request.uploads), request.quantite_min)


def percentage(documents_upload: int, documents_requis: int) -> int:
    """Rounded (half up) completion percentage; 100 when nothing is required."""
    if documents_requis == 0:
        return 100
    return math.floor(100 * documents_upload / documents_requis + 0.5)


def derive_dossier_status(
    requests: Sequence[DocumentRequestResult],
    documents_upload: int,
    current: DossierStatus | None = None,
) -> DossierStatus:
    """Derive dossier status. VALIDATED is sticky and only set by finalization."""
    if current == DossierStatus.VALIDATED:
        return DossierStatus.VALIDATED
    if documents_upload == 0:
        return DossierStatus.PENDING
    if all(is_request_approved(r) for r in requests if r.obligatoire):
        return DossierStatus.COMPLETE
    return DossierStatus.IN_PROGRESS


def compute_progress(dossier: DossierResult) -> DossierProgress:
    """Compute documents_requis, documents_upload, pourcentage and status for a dossier."""
    documents_requis = sum(r.quantite_min for r in dossier.requests)
    documents_upload = sum(request_contribution(r) for r in dossier.requests)
    return DossierProgress(
        dossier_id=dossier.id,
        documents_requis=documents_requis,
        documents_upload=documents_upload,
        pourcentage=percentage(documents_upload, documents_requis),
        status=derive_dossier_status(dossier.requests, documents_upload, dossier.status),
    )
