"""Dossier API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from dossierhub.domain.enums import DossierStatus, RequestStatus
from dossierhub.schemas.template import DocumentRequestItem
from dossierhub.schemas.upload import DocumentUploadResponse


class DossierDraftFields(BaseModel):
    """Fields shared by single and batch creation.

    Either template_id or document_requests supplies the requests; when both are
    given, the inline requests are appended after the template items.
    """

    name: str = Field(..., max_length=255)
    description: str | None = None
    period: str | None = Field(default=None, max_length=50)
    due_date: datetime | None = None
    template_id: str | None = None
    document_requests: list[DocumentRequestItem] = Field(default_factory=list)


class DossierCreateRequest(DossierDraftFields):
    """Request body for POST /dossiers."""

    client_id: str = Field(..., min_length=1)


class DossierBatchCreateRequest(DossierDraftFields):
    """Request body for POST /dossiers/batch."""

    client_ids: list[str] = Field(default_factory=list)


class DossierDuplicateRequest(BaseModel):
    """Request body for POST /dossiers/{id}/duplicate."""

    client_ids: list[str] = Field(default_factory=list)
    name: str | None = Field(default=None, max_length=255)


class DossierFinalizeRequest(BaseModel):
    """Request body for POST /dossiers/{id}/finalize."""

    comment: str | None = Field(default=None, max_length=2000)


class DocumentRequestResponse(BaseModel):
    """Document request with its upload ledger (oldest first)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    dossier_id: str
    title: str
    document_type: str
    obligatoire: bool
    quantite_min: int
    quantite_max: int
    status: RequestStatus
    description: str | None = None
    accepted_formats: str
    max_size_mb: float | None = None
    instructions: str | None = None
    due_date: datetime | None = None
    position: int
    uploads: list[DocumentUploadResponse]


class DossierResponse(BaseModel):
    """Dossier with derived counters and its requests."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    client_id: str
    accountant_id: str
    name: str
    status: DossierStatus
    created_at: datetime
    documents_requis: int
    documents_upload: int
    pourcentage: int
    description: str | None = None
    period: str | None = None
    due_date: datetime | None = None
    completed_at: datetime | None = None
    validated_at: datetime | None = None
    validation_comment: str | None = None
    requests: list[DocumentRequestResponse]


class BatchCreateErrorResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    client_id: str
    reason: str


class BatchCreateResponse(BaseModel):
    """Per-client outcome of a batch creation or duplication."""

    model_config = ConfigDict(from_attributes=True)

    created: list[DossierResponse]
    errors: list[BatchCreateErrorResponse]


class ClientDossierSummaryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total: int
    pending: int
    in_progress: int
    complete: int
    validated: int
    urgent: int


class ClientDossierListResponse(BaseModel):
    """Response for GET /dossiers?client_id=."""

    dossiers: list[DossierResponse]
    summary: ClientDossierSummaryResponse
    urgent_ids: list[str]


class DossierProgressResponse(BaseModel):
    """Response for GET /dossiers/{id}/progress."""

    model_config = ConfigDict(from_attributes=True)

    dossier_id: str
    documents_requis: int
    documents_upload: int
    pourcentage: int
    status: DossierStatus


class DossierProgressRowResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    dossier_id: str
    name: str
    client_id: str
    progress: DossierProgressResponse


class AccountantProgressResponse(BaseModel):
    """Response for GET /dossiers/progress (accountant board)."""

    model_config = ConfigDict(from_attributes=True)

    dossiers: list[DossierProgressRowResponse]
    total_dossiers: int
    completed_dossiers: int
    pending_dossiers: int
