"""DocumentRequest ORM model. One required document type inside a dossier."""

from datetime import datetime

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from dossierhub.domain.enums import RequestStatus
from dossierhub.infrastructure.persistence.database import Base
from dossierhub.infrastructure.persistence.models.mixins import (
    TimestampedModel,
    status_check,
)


class DocumentRequest(TimestampedModel, Base):
    """Document request. Table: document_request. Quantity bounds are fixed at creation."""

    __tablename__ = "document_request"

    dossier_id: Mapped[str] = mapped_column(
        String, ForeignKey("dossier.id", ondelete="CASCADE"), nullable=False, index=True
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    document_type: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    obligatoire: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    quantite_min: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    quantite_max: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    accepted_formats: Mapped[str] = mapped_column(String(255), nullable=False, default="*")
    max_size_mb: Mapped[float | None] = mapped_column(Float, nullable=True)
    instructions: Mapped[str | None] = mapped_column(Text, nullable=True)
    due_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    status: Mapped[str] = mapped_column(
        String, nullable=False, default=RequestStatus.AWAITING.value
    )

    __table_args__ = (
        UniqueConstraint("dossier_id", "position", name="uq_document_request_position"),
        CheckConstraint(
            "quantite_min >= 1 AND quantite_min <= quantite_max",
            name="document_request_quantity_check",
        ),
        status_check(RequestStatus.values(), "document_request_status_check"),
    )
