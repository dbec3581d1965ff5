"""DossierTemplate ORM models. Reusable request lists; accountant_id null = shared."""

from sqlalchemy import Boolean, Float, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from dossierhub.infrastructure.persistence.database import Base
from dossierhub.infrastructure.persistence.models.mixins import TimestampedModel


class DossierTemplate(TimestampedModel, Base):
    """Dossier template. Table: dossier_template."""

    __tablename__ = "dossier_template"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    accountant_id: Mapped[str | None] = mapped_column(String, nullable=True, index=True)


class DossierTemplateItem(TimestampedModel, Base):
    """One request blueprint inside a template. Table: dossier_template_item."""

    __tablename__ = "dossier_template_item"

    template_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("dossier_template.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    document_type: Mapped[str] = mapped_column(String(100), nullable=False)
    obligatoire: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    quantite_min: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    quantite_max: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    accepted_formats: Mapped[str] = mapped_column(String(255), nullable=False, default="*")
    max_size_mb: Mapped[float | None] = mapped_column(Float, nullable=True)
    instructions: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        UniqueConstraint("template_id", "position", name="uq_dossier_template_item_position"),
    )
