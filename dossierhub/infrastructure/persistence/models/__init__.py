"""SQLAlchemy ORM models. Importing this package registers every table on Base.metadata."""

from dossierhub.infrastructure.persistence.models.client import Client
from dossierhub.infrastructure.persistence.models.document_request import DocumentRequest
from dossierhub.infrastructure.persistence.models.document_upload import DocumentUpload
from dossierhub.infrastructure.persistence.models.dossier import Dossier
from dossierhub.infrastructure.persistence.models.dossier_template import (
    DossierTemplate,
    DossierTemplateItem,
)

__all__ = [
    "Client",
    "DocumentRequest",
    "DocumentUpload",
    "Dossier",
    "DossierTemplate",
    "DossierTemplateItem",
]
