"""DocumentUpload ORM model. Append-only ledger of files submitted to a request."""

from datetime import datetime

from sqlalchemy import (
    BigInteger,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from dossierhub.domain.enums import UploadStatus
from dossierhub.infrastructure.persistence.database import Base
from dossierhub.infrastructure.persistence.models.mixins import (
    TimestampedModel,
    status_check,
)


class DocumentUpload(TimestampedModel, Base):
    """Document upload. Table: document_upload. Rows are never deleted, only re-statused."""

    __tablename__ = "document_upload"

    request_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("document_request.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    sequence: Mapped[int] = mapped_column(Integer, nullable=False)
    file_id: Mapped[str] = mapped_column(String, nullable=False)
    file_name: Mapped[str] = mapped_column(String(255), nullable=False)
    file_size: Mapped[int] = mapped_column(BigInteger, nullable=False)
    mime_type: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[str] = mapped_column(
        String, nullable=False, default=UploadStatus.PENDING.value, index=True
    )
    submitted_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    submitted_by: Mapped[str | None] = mapped_column(String, nullable=True)
    reviewer_comment: Mapped[str | None] = mapped_column(Text, nullable=True)
    decided_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    decided_by: Mapped[str | None] = mapped_column(String, nullable=True)
    replaced_by_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("document_upload.id", ondelete="SET NULL"), nullable=True
    )

    __table_args__ = (
        UniqueConstraint("request_id", "sequence", name="uq_document_upload_sequence"),
        status_check(UploadStatus.values(), "document_upload_status_check"),
    )
