"""Upload, quota and review API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from dossierhub.domain.enums import UploadDecision, UploadStatus


class FileRefResponse(BaseModel):
    """Opaque reference to stored bytes."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    size: int
    mime_type: str


class DocumentUploadResponse(BaseModel):
    """One entry of a request's upload ledger."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    request_id: str
    file: FileRefResponse
    status: UploadStatus
    submitted_at: datetime
    sequence: int
    submitted_by: str | None = None
    reviewer_comment: str | None = None
    decided_at: datetime | None = None
    decided_by: str | None = None
    replaced_by_id: str | None = None


class QuotaHintResponse(BaseModel):
    """Response for GET /requests/{id}/quota."""

    model_config = ConfigDict(from_attributes=True)

    request_id: str
    quantite_min: int
    quantite_max: int
    valid_count: int
    refused_count: int
    available_slots: int
    max_acceptable: int
    level: str
    message: str | None = None


class QuotaRejectionResponse(BaseModel):
    """Typed quota refusal: nothing was recorded."""

    model_config = ConfigDict(from_attributes=True)

    error: str = "QUOTA_EXCEEDED"
    request_id: str
    allowed: int
    requested: int


class SubmitUploadsResponse(BaseModel):
    """Response for POST /requests/{id}/uploads."""

    model_config = ConfigDict(from_attributes=True)

    request_id: str
    accepted: list[DocumentUploadResponse]
    rejected: QuotaRejectionResponse | None = None


class UploadDecisionRequest(BaseModel):
    """Request body for POST /uploads/{id}/decision."""

    decision: UploadDecision
    comment: str | None = Field(default=None, max_length=2000)
