"""Dossier API: creation (single, batch, duplicate), reads, progress and finalization."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from dossierhub.api.v1.dependencies import (
    authorize_dossier,
    get_batch_create_use_case,
    get_create_dossier_use_case,
    get_current_accountant,
    get_current_actor,
    get_dossier_query_service,
    get_duplicate_dossier_use_case,
    get_finalize_dossier_use_case,
    get_template_service,
)
from dossierhub.application.dtos.dossier import DossierDraft
from dossierhub.application.dtos.identity import Actor
from dossierhub.application.services.authorization_service import ensure_client_access
from dossierhub.application.use_cases.dossiers import (
    CreateDossierUseCase,
    CreateDossiersBatchUseCase,
    DossierQueryService,
    DossierTemplateService,
    DuplicateDossierUseCase,
    FinalizeDossierUseCase,
)
from dossierhub.domain.exceptions import ValidationException
from dossierhub.schemas.dossier import (
    AccountantProgressResponse,
    BatchCreateResponse,
    ClientDossierListResponse,
    ClientDossierSummaryResponse,
    DossierBatchCreateRequest,
    DossierCreateRequest,
    DossierDraftFields,
    DossierDuplicateRequest,
    DossierFinalizeRequest,
    DossierProgressResponse,
    DossierResponse,
)

router = APIRouter()


async def _draft_from_body(
    body: DossierDraftFields,
    template_svc: DossierTemplateService,
    accountant_id: str,
) -> DossierDraft:
    inline = [item.to_template() for item in body.document_requests]
    if body.template_id:
        return await template_svc.build_draft(
            body.template_id,
            body.name,
            description=body.description,
            period=body.period,
            due_date=body.due_date,
            extra_requests=inline,
            accountant_id=accountant_id,
        )
    return DossierDraft(
        name=body.name,
        description=body.description,
        period=body.period,
        due_date=body.due_date,
        requests=inline,
    )


@router.post("", response_model=DossierResponse, status_code=201)
async def create_dossier(
    body: DossierCreateRequest,
    actor: Annotated[Actor, Depends(get_current_accountant)],
    create_uc: Annotated[CreateDossierUseCase, Depends(get_create_dossier_use_case)],
    template_svc: Annotated[DossierTemplateService, Depends(get_template_service)],
):
    """Create one dossier for a client from inline requests and/or a template."""
    draft = await _draft_from_body(body, template_svc, actor.user_id)
    created = await create_uc.execute(body.client_id, draft, actor.user_id)
    return DossierResponse.model_validate(created)


@router.post("/batch", response_model=BatchCreateResponse, status_code=201)
async def create_dossiers_batch(
    body: DossierBatchCreateRequest,
    actor: Annotated[Actor, Depends(get_current_accountant)],
    batch_uc: Annotated[CreateDossiersBatchUseCase, Depends(get_batch_create_use_case)],
    template_svc: Annotated[DossierTemplateService, Depends(get_template_service)],
):
    """Create the same dossier for several clients; failures are reported per client."""
    draft = await _draft_from_body(body, template_svc, actor.user_id)
    result = await batch_uc.execute(body.client_ids, draft, actor.user_id)
    return BatchCreateResponse.model_validate(result)


@router.get("", response_model=ClientDossierListResponse)
async def list_client_dossiers(
    actor: Annotated[Actor, Depends(get_current_actor)],
    query_svc: Annotated[DossierQueryService, Depends(get_dossier_query_service)],
    client_id: str | None = Query(None, description="Defaults to the calling client"),
):
    """List a client's dossiers with status counts; urgent ones are flagged."""
    target = client_id or actor.client_id
    if not target:
        raise ValidationException("client_id is required", field="client_id")
    ensure_client_access(actor, target, "dossier", "list")
    listing = await query_svc.list_client_dossiers(target)
    return ClientDossierListResponse(
        dossiers=[DossierResponse.model_validate(d) for d in listing.dossiers],
        summary=ClientDossierSummaryResponse.model_validate(listing.summary),
        urgent_ids=sorted(listing.urgent_ids),
    )


@router.get("/progress", response_model=AccountantProgressResponse)
async def accountant_progress(
    actor: Annotated[Actor, Depends(get_current_accountant)],
    query_svc: Annotated[DossierQueryService, Depends(get_dossier_query_service)],
):
    """Progress board across the accountant's dossiers. Defined before /{dossier_id}."""
    summary = await query_svc.accountant_progress(actor.user_id)
    return AccountantProgressResponse.model_validate(summary)


@router.get("/{dossier_id}", response_model=DossierResponse)
async def get_dossier(
    dossier_id: str,
    actor: Annotated[Actor, Depends(get_current_actor)],
    query_svc: Annotated[DossierQueryService, Depends(get_dossier_query_service)],
):
    """Get a dossier with its requests and upload ledgers."""
    dossier = await authorize_dossier(actor, dossier_id, query_svc, "read")
    return DossierResponse.model_validate(dossier)


@router.get("/{dossier_id}/progress", response_model=DossierProgressResponse)
async def get_dossier_progress(
    dossier_id: str,
    actor: Annotated[Actor, Depends(get_current_actor)],
    query_svc: Annotated[DossierQueryService, Depends(get_dossier_query_service)],
):
    """Counters, percentage and status derived from the current snapshot."""
    await authorize_dossier(actor, dossier_id, query_svc, "read")
    progress = await query_svc.get_progress(dossier_id)
    return DossierProgressResponse.model_validate(progress)


@router.post("/{dossier_id}/duplicate", response_model=BatchCreateResponse, status_code=201)
async def duplicate_dossier(
    dossier_id: str,
    body: DossierDuplicateRequest,
    actor: Annotated[Actor, Depends(get_current_accountant)],
    query_svc: Annotated[DossierQueryService, Depends(get_dossier_query_service)],
    duplicate_uc: Annotated[DuplicateDossierUseCase, Depends(get_duplicate_dossier_use_case)],
):
    """Copy the dossier's requests (not uploads) to new dossiers for other clients."""
    await authorize_dossier(actor, dossier_id, query_svc, "duplicate")
    result = await duplicate_uc.execute(
        dossier_id, body.client_ids, actor.user_id, new_name=body.name
    )
    return BatchCreateResponse.model_validate(result)


@router.post("/{dossier_id}/finalize", response_model=DossierResponse)
async def finalize_dossier(
    dossier_id: str,
    actor: Annotated[Actor, Depends(get_current_accountant)],
    query_svc: Annotated[DossierQueryService, Depends(get_dossier_query_service)],
    finalize_uc: Annotated[FinalizeDossierUseCase, Depends(get_finalize_dossier_use_case)],
    body: DossierFinalizeRequest | None = None,
):
    """Move a COMPLETE dossier to VALIDATED (terminal)."""
    await authorize_dossier(actor, dossier_id, query_svc, "finalize")
    validated = await finalize_uc.execute(
        dossier_id, comment=body.comment if body else None
    )
    return DossierResponse.model_validate(validated)
