"""Client ORM model. Company followed by an accountant; owner of dossiers."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from dossierhub.infrastructure.persistence.database import Base
from dossierhub.infrastructure.persistence.models.mixins import TimestampedModel


class Client(TimestampedModel, Base):
    """Client entity. Table: client."""

    __tablename__ = "client"

    accountant_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    company_name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str | None] = mapped_column(String(320), nullable=True)
    activity_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
