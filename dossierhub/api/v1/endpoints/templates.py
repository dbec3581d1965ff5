"""Dossier template API: list shared and own templates, create new ones."""

from typing import Annotated

from fastapi import APIRouter, Depends

from dossierhub.api.v1.dependencies import get_current_accountant, get_template_service
from dossierhub.application.dtos.identity import Actor
from dossierhub.application.use_cases.dossiers import DossierTemplateService
from dossierhub.schemas.template import TemplateCreateRequest, TemplateResponse

router = APIRouter()


@router.get("", response_model=list[TemplateResponse])
async def list_templates(
    actor: Annotated[Actor, Depends(get_current_accountant)],
    template_svc: Annotated[DossierTemplateService, Depends(get_template_service)],
):
    """List shared templates plus the accountant's own."""
    templates = await template_svc.list_templates(actor.user_id)
    return [TemplateResponse.model_validate(t) for t in templates]


@router.post("", response_model=TemplateResponse, status_code=201)
async def create_template(
    body: TemplateCreateRequest,
    actor: Annotated[Actor, Depends(get_current_accountant)],
    template_svc: Annotated[DossierTemplateService, Depends(get_template_service)],
):
    """Create a template owned by the accountant (or shared)."""
    created = await template_svc.create_template(
        name=body.name,
        items=[item.to_template() for item in body.items],
        accountant_id=None if body.shared else actor.user_id,
    )
    return TemplateResponse.model_validate(created)
