"""Dossier manager, finalization, recomputation and read-side use cases."""

from dossierhub.application.use_cases.dossiers.create_dossier import (
    CreateDossierUseCase,
    CreateDossiersBatchUseCase,
    DuplicateDossierUseCase,
    draft_from_dossier,
    validate_draft,
)
from dossierhub.application.use_cases.dossiers.dossier_queries import (
    DossierQueryService,
    is_urgent,
)
from dossierhub.application.use_cases.dossiers.finalize_dossier import (
    FinalizeDossierUseCase,
)
from dossierhub.application.use_cases.dossiers.notify_due_soon import (
    NotifyDueSoonUseCase,
)
from dossierhub.application.use_cases.dossiers.recompute_dossier_state import (
    RecomputeDossierStateUseCase,
    RecomputeOutcome,
)
from dossierhub.application.use_cases.dossiers.templates import DossierTemplateService

__all__ = [
    "CreateDossierUseCase",
    "CreateDossiersBatchUseCase",
    "DossierQueryService",
    "DossierTemplateService",
    "DuplicateDossierUseCase",
    "FinalizeDossierUseCase",
    "NotifyDueSoonUseCase",
    "RecomputeDossierStateUseCase",
    "RecomputeOutcome",
    "draft_from_dossier",
    "is_urgent",
    "validate_draft",
]
