"""Dossier templates: reusable request lists for dossier creation."""

from __future__ import annotations

from datetime import datetime

from dossierhub.application.dtos.dossier import (
    DocumentRequestTemplate,
    DossierDraft,
    DossierTemplateResult,
)
from dossierhub.application.interfaces.repositories import IDossierTemplateRepository
from dossierhub.domain.exceptions import ResourceNotFoundException, ValidationException
from dossierhub.domain.value_objects import QuantityRange


class DossierTemplateService:
    """List, create and expand templates into dossier drafts."""

    def __init__(self, template_repo: IDossierTemplateRepository) -> None:
        self._template_repo = template_repo

    async def list_templates(self, accountant_id: str | None = None) -> list[DossierTemplateResult]:
        return await self._template_repo.list_templates(accountant_id)

    async def create_template(
        self,
        name: str,
        items: list[DocumentRequestTemplate],
        accountant_id: str | None = None,
    ) -> DossierTemplateResult:
        """Create a template after validating each item's quantities.

        Raises:
            ValidationException: If name is empty, items are empty, or quantities invalid.
        """
        if not name or not name.strip():
            raise ValidationException("Template name is required", field="name")
        if not items:
            raise ValidationException("A template needs at least one item", field="items")
        for item in items:
            QuantityRange(item.quantite_min, item.quantite_max)
        return await self._template_repo.create_template(name, items, accountant_id)

    async def build_draft(
        self,
        template_id: str,
        name: str,
        *,
        description: str | None = None,
        period: str | None = None,
        due_date: datetime | None = None,
        extra_requests: list[DocumentRequestTemplate] | None = None,
        accountant_id: str | None = None,
    ) -> DossierDraft:
        """Expand a stored template into a draft; extra_requests follow the template items."""
        template = await self._template_repo.get_by_id(template_id)
        if not template or (
            template.accountant_id is not None and template.accountant_id != accountant_id
        ):
            raise ResourceNotFoundException("dossier_template", template_id)
        return DossierDraft(
            name=name,
            description=description,
            period=period,
            due_date=due_date,
            requests=[*template.items, *(extra_requests or [])],
        )
