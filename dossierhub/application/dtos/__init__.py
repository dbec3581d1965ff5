"""Application DTOs (frozen dataclasses exchanged between layers)."""

from dossierhub.application.dtos.dossier import (
    BatchCreateError,
    BatchCreateResult,
    ClientResult,
    DocumentRequestResult,
    DocumentRequestTemplate,
    DocumentUploadResult,
    DossierDraft,
    DossierResult,
    DossierTemplateResult,
)
from dossierhub.application.dtos.identity import Actor
from dossierhub.application.dtos.notification import Notification
from dossierhub.application.dtos.progress import (
    AccountantProgressSummary,
    ClientDossierList,
    ClientDossierSummary,
    DossierProgress,
    DossierProgressRow,
)
from dossierhub.application.dtos.upload import (
    QuotaDecision,
    QuotaHint,
    QuotaRejection,
    SubmitUploadsResult,
)

__all__ = [
    "AccountantProgressSummary",
    "Actor",
    "BatchCreateError",
    "BatchCreateResult",
    "ClientDossierList",
    "ClientDossierSummary",
    "ClientResult",
    "DocumentRequestResult",
    "DocumentRequestTemplate",
    "DocumentUploadResult",
    "DossierDraft",
    "DossierProgress",
    "DossierProgressRow",
    "DossierResult",
    "DossierTemplateResult",
    "Notification",
    "QuotaDecision",
    "QuotaHint",
    "QuotaRejection",
    "SubmitUploadsResult",
]
