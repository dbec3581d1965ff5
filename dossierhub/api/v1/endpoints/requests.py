"""Document request API: quota hint and file submission."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, UploadFile

from dossierhub.api.v1.dependencies import (
    authorize_request,
    get_current_actor,
    get_dossier_query_service,
    get_file_store,
    get_quota_hint_use_case,
    get_request_repo,
    get_submit_uploads_use_case,
)
from dossierhub.application.dtos.identity import Actor
from dossierhub.application.interfaces.services import IFileStore
from dossierhub.application.use_cases.dossiers import DossierQueryService
from dossierhub.application.use_cases.uploads import (
    GetQuotaHintUseCase,
    SubmitUploadsUseCase,
)
from dossierhub.domain.exceptions import QuotaExceededException, ValidationException
from dossierhub.domain.value_objects import FileRef
from dossierhub.infrastructure.persistence.repositories import DocumentRequestRepository
from dossierhub.schemas.upload import QuotaHintResponse, SubmitUploadsResponse

logger = logging.getLogger(__name__)

router = APIRouter()


async def _discard(file_store: IFileStore, stored: list[FileRef]) -> None:
    """Delete bytes that were stored for a submission that was not recorded."""
    for ref in stored:
        await file_store.delete(ref.id)
    if stored:
        logger.info("Discarded %d stored file(s) of an unrecorded submission", len(stored))


@router.get("/{request_id}/quota", response_model=QuotaHintResponse)
async def get_quota_hint(
    request_id: str,
    actor: Annotated[Actor, Depends(get_current_actor)],
    request_repo: Annotated[DocumentRequestRepository, Depends(get_request_repo)],
    query_svc: Annotated[DossierQueryService, Depends(get_dossier_query_service)],
    hint_uc: Annotated[GetQuotaHintUseCase, Depends(get_quota_hint_use_case)],
):
    """How many files the request accepts right now, and a level for UI hints."""
    await authorize_request(actor, request_id, request_repo, query_svc, "read")
    request, hint = await hint_uc.execute(request_id)
    return QuotaHintResponse(
        request_id=hint.request_id,
        quantite_min=request.quantite_min,
        quantite_max=request.quantite_max,
        valid_count=hint.valid_count,
        refused_count=hint.refused_count,
        available_slots=hint.available_slots,
        max_acceptable=hint.max_acceptable,
        level=hint.level,
        message=hint.message,
    )


@router.post("/{request_id}/uploads", response_model=SubmitUploadsResponse, status_code=201)
async def submit_uploads(
    request_id: str,
    actor: Annotated[Actor, Depends(get_current_actor)],
    request_repo: Annotated[DocumentRequestRepository, Depends(get_request_repo)],
    query_svc: Annotated[DossierQueryService, Depends(get_dossier_query_service)],
    file_store: Annotated[IFileStore, Depends(get_file_store)],
    submit_uc: Annotated[SubmitUploadsUseCase, Depends(get_submit_uploads_use_case)],
    files: list[UploadFile] = File(...),
):
    """Submit one or more files. All are recorded or none (409 QUOTA_EXCEEDED)."""
    await authorize_request(actor, request_id, request_repo, query_svc, "upload")
    stored: list[FileRef] = []
    try:
        for upload in files:
            if not upload.filename:
                raise ValidationException("Filename required", field="files")
            stored.append(
                await file_store.save(
                    upload.file,
                    upload.filename,
                    upload.content_type or "application/octet-stream",
                )
            )
        result = await submit_uc.execute(request_id, stored, submitted_by=actor.user_id)
    except Exception:
        await _discard(file_store, stored)
        raise
    if result.rejected is not None:
        await _discard(file_store, stored)
        raise QuotaExceededException(
            request_id, result.rejected.allowed, result.rejected.requested
        )
    return SubmitUploadsResponse.model_validate(result)
