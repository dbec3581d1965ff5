"""Dossier template repository. Shared templates have no accountant."""

from __future__ import annotations

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from dossierhub.application.dtos.dossier import (
    DocumentRequestTemplate,
    DossierTemplateResult,
)
from dossierhub.infrastructure.persistence.models.dossier_template import (
    DossierTemplate,
    DossierTemplateItem,
)
from dossierhub.infrastructure.persistence.repositories.base import BaseRepository


def _item_to_template(i: DossierTemplateItem) -> DocumentRequestTemplate:
    return DocumentRequestTemplate(
        title=i.title,
        description=i.description,
        document_type=i.document_type,
        obligatoire=i.obligatoire,
        quantite_min=i.quantite_min,
        quantite_max=i.quantite_max,
        accepted_formats=i.accepted_formats,
        max_size_mb=i.max_size_mb,
        instructions=i.instructions,
    )


class DossierTemplateRepository(BaseRepository[DossierTemplate]):
    """Templates with their ordered items."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, DossierTemplate)

    async def _hydrate(self, rows: list[DossierTemplate]) -> list[DossierTemplateResult]:
        items: dict[str, list[DocumentRequestTemplate]] = {t.id: [] for t in rows}
        if rows:
            result = await self.db.execute(
                select(DossierTemplateItem)
                .where(DossierTemplateItem.template_id.in_(list(items)))
                .order_by(DossierTemplateItem.template_id, DossierTemplateItem.position)
            )
            for item in result.scalars().all():
                items[item.template_id].append(_item_to_template(item))
        return [
            DossierTemplateResult(
                id=t.id,
                name=t.name,
                accountant_id=t.accountant_id,
                items=items[t.id],
            )
            for t in rows
        ]

    async def get_by_id(self, template_id: str) -> DossierTemplateResult | None:
        row = await self._get_orm_by_id(template_id)
        return (await self._hydrate([row]))[0] if row else None

    async def list_templates(
        self, accountant_id: str | None = None
    ) -> list[DossierTemplateResult]:
        criteria = DossierTemplate.accountant_id.is_(None)
        if accountant_id:
            criteria = or_(criteria, DossierTemplate.accountant_id == accountant_id)
        result = await self.db.execute(
            select(DossierTemplate).where(criteria).order_by(DossierTemplate.name)
        )
        return await self._hydrate(list(result.scalars().all()))

    async def create_template(
        self,
        name: str,
        items: list[DocumentRequestTemplate],
        accountant_id: str | None = None,
    ) -> DossierTemplateResult:
        template = await self.create(
            DossierTemplate(name=name.strip(), accountant_id=accountant_id)
        )
        await self.create_all(
            [
                DossierTemplateItem(
                    template_id=template.id,
                    position=position,
                    title=item.title,
                    description=item.description,
                    document_type=item.document_type,
                    obligatoire=item.obligatoire,
                    quantite_min=item.quantite_min,
                    quantite_max=item.quantite_max,
                    accepted_formats=item.accepted_formats or "*",
                    max_size_mb=item.max_size_mb,
                    instructions=item.instructions,
                )
                for position, item in enumerate(items)
            ]
        )
        return DossierTemplateResult(
            id=template.id,
            name=template.name,
            accountant_id=template.accountant_id,
            items=list(items),
        )
