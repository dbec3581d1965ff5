"""Repositories: SQLAlchemy implementations of the application repository protocols."""

from dossierhub.infrastructure.persistence.repositories.client_repo import ClientRepository
from dossierhub.infrastructure.persistence.repositories.document_request_repo import (
    DocumentRequestRepository,
)
from dossierhub.infrastructure.persistence.repositories.document_upload_repo import (
    DocumentUploadRepository,
)
from dossierhub.infrastructure.persistence.repositories.dossier_repo import (
    DossierRepository,
)
from dossierhub.infrastructure.persistence.repositories.dossier_template_repo import (
    DossierTemplateRepository,
)

__all__ = [
    "ClientRepository",
    "DocumentRequestRepository",
    "DocumentUploadRepository",
    "DossierRepository",
    "DossierTemplateRepository",
]
