"""DTOs for dossier progress and listing summaries."""

from dataclasses import dataclass

from dossierhub.application.dtos.dossier import DossierResult
from dossierhub.domain.enums import DossierStatus


@dataclass(frozen=True)
class DossierProgress:
    """Completion counters and status of one dossier."""

    dossier_id: str
    documents_requis: int
    documents_upload: int
    pourcentage: int
    status: DossierStatus


@dataclass(frozen=True)
class DossierProgressRow:
    """One line of the accountant's progress board."""

    dossier_id: str
    name: str
    client_id: str
    progress: DossierProgress


@dataclass(frozen=True)
class AccountantProgressSummary:
    """Progress board for every dossier an accountant owns."""

    dossiers: list[DossierProgressRow]
    total_dossiers: int
    completed_dossiers: int  # COMPLETE or VALIDATED
    pending_dossiers: int  # everything else


@dataclass(frozen=True)
class ClientDossierSummary:
    """Status counts for a client's dossiers."""

    total: int
    pending: int
    in_progress: int
    complete: int
    validated: int
    urgent: int  # due within the configured window and not VALIDATED


@dataclass(frozen=True)
class ClientDossierList:
    """A client's dossiers with summary counts and the ids flagged urgent."""

    dossiers: list[DossierResult]
    summary: ClientDossierSummary
    urgent_ids: frozenset[str] = frozenset()
