"""Upload review API: start review and approve/reject decisions (accountant only)."""

from typing import Annotated

from fastapi import APIRouter, Depends

from dossierhub.api.v1.dependencies import (
    authorize_upload,
    get_current_accountant,
    get_decide_upload_use_case,
    get_dossier_query_service,
    get_request_repo,
    get_start_review_use_case,
    get_upload_repo,
)
from dossierhub.application.dtos.identity import Actor
from dossierhub.application.use_cases.dossiers import DossierQueryService
from dossierhub.application.use_cases.uploads import (
    DecideUploadUseCase,
    StartReviewUseCase,
)
from dossierhub.infrastructure.persistence.repositories import (
    DocumentRequestRepository,
    DocumentUploadRepository,
)
from dossierhub.schemas.upload import DocumentUploadResponse, UploadDecisionRequest

router = APIRouter()


@router.post("/{upload_id}/review", response_model=DocumentUploadResponse)
async def start_review(
    upload_id: str,
    actor: Annotated[Actor, Depends(get_current_accountant)],
    upload_repo: Annotated[DocumentUploadRepository, Depends(get_upload_repo)],
    request_repo: Annotated[DocumentRequestRepository, Depends(get_request_repo)],
    query_svc: Annotated[DossierQueryService, Depends(get_dossier_query_service)],
    review_uc: Annotated[StartReviewUseCase, Depends(get_start_review_use_case)],
):
    """Mark a PENDING upload as IN_REVIEW."""
    await authorize_upload(actor, upload_id, upload_repo, request_repo, query_svc, "review")
    upload = await review_uc.execute(upload_id, reviewer_id=actor.user_id)
    return DocumentUploadResponse.model_validate(upload)


@router.post("/{upload_id}/decision", response_model=DocumentUploadResponse)
async def decide_upload(
    upload_id: str,
    body: UploadDecisionRequest,
    actor: Annotated[Actor, Depends(get_current_accountant)],
    upload_repo: Annotated[DocumentUploadRepository, Depends(get_upload_repo)],
    request_repo: Annotated[DocumentRequestRepository, Depends(get_request_repo)],
    query_svc: Annotated[DossierQueryService, Depends(get_dossier_query_service)],
    decide_uc: Annotated[DecideUploadUseCase, Depends(get_decide_upload_use_case)],
):
    """Approve or reject an upload; request and dossier state are re-derived."""
    await authorize_upload(actor, upload_id, upload_repo, request_repo, query_svc, "review")
    upload = await decide_uc.execute(
        upload_id, body.decision, comment=body.comment, decided_by=actor.user_id
    )
    return DocumentUploadResponse.model_validate(upload)
