"""Ownership checks shared by dossier, request and upload routes."""

from __future__ import annotations

from dossierhub.application.dtos.dossier import (
    DocumentRequestResult,
    DocumentUploadResult,
    DossierResult,
)
from dossierhub.application.dtos.identity import Actor
from dossierhub.application.interfaces.repositories import (
    IDocumentRequestRepository,
    IDocumentUploadRepository,
)
from dossierhub.application.services.authorization_service import ensure_dossier_access
from dossierhub.application.use_cases.dossiers import DossierQueryService
from dossierhub.domain.exceptions import ResourceNotFoundException


async def authorize_dossier(
    actor: Actor,
    dossier_id: str,
    query_svc: DossierQueryService,
    action: str,
) -> DossierResult:
    """Return the dossier if the actor may act on it."""
    dossier = await query_svc.get_dossier(dossier_id)
    ensure_dossier_access(actor, dossier, action)
    return dossier


async def authorize_request(
    actor: Actor,
    request_id: str,
    request_repo: IDocumentRequestRepository,
    query_svc: DossierQueryService,
    action: str,
) -> DocumentRequestResult:
    """Return the request if the actor may act on its dossier."""
    request = await request_repo.get_by_id(request_id)
    if not request:
        raise ResourceNotFoundException("document_request", request_id)
    await authorize_dossier(actor, request.dossier_id, query_svc, action)
    return request


async def authorize_upload(
    actor: Actor,
    upload_id: str,
    upload_repo: IDocumentUploadRepository,
    request_repo: IDocumentRequestRepository,
    query_svc: DossierQueryService,
    action: str,
) -> DocumentUploadResult:
    """Return the upload if the actor may act on its dossier."""
    upload = await upload_repo.get_by_id(upload_id)
    if not upload:
        raise ResourceNotFoundException("document_upload", upload_id)
    await authorize_request(actor, upload.request_id, request_repo, query_svc, action)
    return upload
