"""Dossier ORM model. Derived counters are persisted next to the status."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from dossierhub.domain.enums import DossierStatus
from dossierhub.infrastructure.persistence.database import Base
from dossierhub.infrastructure.persistence.models.mixins import (
    TimestampedModel,
    status_check,
)


class Dossier(TimestampedModel, Base):
    """Dossier entity. Table: dossier. Belongs to one client and one accountant."""

    __tablename__ = "dossier"

    client_id: Mapped[str] = mapped_column(
        String, ForeignKey("client.id", ondelete="CASCADE"), nullable=False, index=True
    )
    accountant_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    period: Mapped[str | None] = mapped_column(String(50), nullable=True)
    due_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, index=True
    )
    status: Mapped[str] = mapped_column(
        String, nullable=False, default=DossierStatus.PENDING.value, index=True
    )
    documents_requis: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    documents_upload: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    pourcentage: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    completed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    validated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    validation_comment: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        Index("ix_dossier_accountant_status", "accountant_id", "status"),
        status_check(DossierStatus.values(), "dossier_status_check"),
    )
