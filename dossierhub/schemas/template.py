"""Document request blueprint and dossier template API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from dossierhub.application.dtos.dossier import DocumentRequestTemplate


class DocumentRequestItem(BaseModel):
    """One document request to create (inline in a dossier or inside a template).

    Quantity bounds are checked by the domain so that every client gets the
    same VALIDATION_ERROR body.
    """

    model_config = ConfigDict(from_attributes=True)

    title: str = Field(..., max_length=255)
    document_type: str = Field(..., min_length=1, max_length=100)
    quantite_min: int = 1
    quantite_max: int = 1
    obligatoire: bool = True
    description: str | None = None
    accepted_formats: str = Field(default="*", max_length=255)
    max_size_mb: float | None = None
    instructions: str | None = None
    due_date: datetime | None = None

    def to_template(self) -> DocumentRequestTemplate:
        return DocumentRequestTemplate(**self.model_dump())


class TemplateCreateRequest(BaseModel):
    """Request body for POST /templates."""

    name: str = Field(..., max_length=255)
    items: list[DocumentRequestItem] = Field(default_factory=list)
    shared: bool = Field(
        default=False, description="Visible to every accountant when true"
    )


class TemplateResponse(BaseModel):
    """Dossier template with its ordered items."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    accountant_id: str | None
    items: list[DocumentRequestItem]
