"""Application services: pure workflow rules and cross-cutting helpers."""

from dossierhub.application.services.progress_aggregator import (
    compute_progress,
    derive_dossier_status,
)
from dossierhub.application.services.quota_guard import (
    can_accept,
    evaluate_quota,
    quota_hint,
)
from dossierhub.application.services.request_status_deriver import (
    derive_request_status,
)

__all__ = [
    "can_accept",
    "compute_progress",
    "derive_dossier_status",
    "derive_request_status",
    "evaluate_quota",
    "quota_hint",
]
