"""DTOs for dossiers, document requests, uploads, clients and templates."""

from dataclasses import dataclass, field
from datetime import datetime

from dossierhub.domain.enums import DossierStatus, RequestStatus, UploadStatus
from dossierhub.domain.value_objects import FileRef


@dataclass(frozen=True)
class ClientResult:
    """Client of the firm (owner of dossiers)."""

    id: str
    accountant_id: str
    company_name: str
    email: str | None
    activity_type: str | None = None


@dataclass(frozen=True)
class DocumentUploadResult:
    """One submitted file against a document request."""

    id: str
    request_id: str
    file: FileRef
    status: UploadStatus
    submitted_at: datetime
    sequence: int = 0  # position in the request ledger, assigned on append
    submitted_by: str | None = None
    reviewer_comment: str | None = None
    decided_at: datetime | None = None
    decided_by: str | None = None
    replaced_by_id: str | None = None  # upload that superseded this rejected one


@dataclass(frozen=True)
class DocumentRequestResult:
    """Document request read-model with its upload ledger (oldest first)."""

    id: str
    dossier_id: str
    title: str
    document_type: str
    obligatoire: bool
    quantite_min: int
    quantite_max: int
    status: RequestStatus
    description: str | None = None
    accepted_formats: str = "*"
    max_size_mb: float | None = None
    instructions: str | None = None
    due_date: datetime | None = None
    position: int = 0
    uploads: list[DocumentUploadResult] = field(default_factory=list)


@dataclass(frozen=True)
class DossierResult:
    """Dossier read-model with its requests (ordered by position)."""

    id: str
    client_id: str
    accountant_id: str
    name: str
    status: DossierStatus
    created_at: datetime
    documents_requis: int = 0
    documents_upload: int = 0
    pourcentage: int = 0
    description: str | None = None
    period: str | None = None
    due_date: datetime | None = None
    completed_at: datetime | None = None
    validated_at: datetime | None = None
    validation_comment: str | None = None
    requests: list[DocumentRequestResult] = field(default_factory=list)


@dataclass(frozen=True)
class DocumentRequestTemplate:
    """Blueprint for one document request inside a new dossier."""

    title: str
    document_type: str
    quantite_min: int = 1
    quantite_max: int = 1
    obligatoire: bool = True
    description: str | None = None
    accepted_formats: str = "*"
    max_size_mb: float | None = None
    instructions: str | None = None
    due_date: datetime | None = None


@dataclass(frozen=True)
class DossierDraft:
    """Everything needed to create one dossier for any client."""

    name: str
    requests: list[DocumentRequestTemplate]
    description: str | None = None
    period: str | None = None
    due_date: datetime | None = None


@dataclass(frozen=True)
class DossierTemplateResult:
    """Reusable list of document request blueprints."""

    id: str
    name: str
    items: list[DocumentRequestTemplate]
    accountant_id: str | None = None


@dataclass(frozen=True)
class BatchCreateError:
    """Per-client failure inside a batch creation."""

    client_id: str
    reason: str


@dataclass(frozen=True)
class BatchCreateResult:
    """Outcome of a best-effort batch creation: successes and per-client failures."""

    created: list[DossierResult]
    errors: list[BatchCreateError]
