"""Dossier repository. Returns full dossier snapshots (requests and uploads) as DTOs."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from dossierhub.application.dtos.dossier import (
    DocumentRequestResult,
    DossierDraft,
    DossierResult,
)
from dossierhub.domain.enums import DossierStatus, RequestStatus
from dossierhub.domain.exceptions import ResourceNotFoundException
from dossierhub.infrastructure.persistence.models.document_request import DocumentRequest
from dossierhub.infrastructure.persistence.models.dossier import Dossier
from dossierhub.infrastructure.persistence.repositories.base import BaseRepository
from dossierhub.infrastructure.persistence.repositories.document_request_repo import (
    load_requests,
)


def _dossier_to_result(
    d: Dossier, requests: list[DocumentRequestResult]
) -> DossierResult:
    """Map ORM Dossier plus its requests to application DossierResult."""
    return DossierResult(
        id=d.id,
        client_id=d.client_id,
        accountant_id=d.accountant_id,
        name=d.name,
        description=d.description,
        period=d.period,
        due_date=d.due_date,
        status=DossierStatus(d.status),
        created_at=d.created_at,
        documents_requis=d.documents_requis,
        documents_upload=d.documents_upload,
        pourcentage=d.pourcentage,
        completed_at=d.completed_at,
        validated_at=d.validated_at,
        validation_comment=d.validation_comment,
        requests=requests,
    )


class DossierRepository(BaseRepository[Dossier]):
    """Dossier persistence. Derived state is written only through update_derived_state."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Dossier)

    async def _hydrate(self, rows: list[Dossier]) -> list[DossierResult]:
        requests = await load_requests(self.db, [d.id for d in rows])
        return [_dossier_to_result(d, requests[d.id]) for d in rows]

    async def _list_where(self, *criteria) -> list[DossierResult]:
        result = await self.db.execute(
            select(Dossier)
            .where(*criteria)
            .order_by(Dossier.created_at.desc(), Dossier.id)
            .execution_options(populate_existing=True)
        )
        return await self._hydrate(list(result.scalars().all()))

    async def get_by_id(self, dossier_id: str) -> DossierResult | None:
        row = await self._get_orm_by_id(dossier_id)
        if not row:
            return None
        return (await self._hydrate([row]))[0]

    async def get_status(self, dossier_id: str) -> DossierStatus | None:
        result = await self.db.execute(
            select(Dossier.status).where(Dossier.id == dossier_id)
        )
        status = result.scalar_one_or_none()
        return DossierStatus(status) if status else None

    async def list_by_client(self, client_id: str) -> list[DossierResult]:
        return await self._list_where(Dossier.client_id == client_id)

    async def list_by_accountant(self, accountant_id: str) -> list[DossierResult]:
        return await self._list_where(Dossier.accountant_id == accountant_id)

    async def list_due_between(
        self, start: datetime, end: datetime
    ) -> list[DossierResult]:
        return await self._list_where(
            Dossier.due_date.is_not(None),
            Dossier.due_date >= start,
            Dossier.due_date <= end,
            Dossier.status != DossierStatus.VALIDATED.value,
        )

    async def create_dossier(
        self,
        client_id: str,
        accountant_id: str,
        draft: DossierDraft,
    ) -> DossierResult:
        """Create the dossier (PENDING) and its requests (AWAITING) in one savepoint.

        A failure rolls back only this dossier, leaving earlier batch entries intact.
        """
        async with self.db.begin_nested():
            dossier = await self.create(
                Dossier(
                    client_id=client_id,
                    accountant_id=accountant_id,
                    name=draft.name.strip(),
                    description=draft.description,
                    period=draft.period,
                    due_date=draft.due_date,
                    status=DossierStatus.PENDING.value,
                    documents_requis=0,
                    documents_upload=0,
                    pourcentage=0,
                )
            )
            await self.create_all(
                [
                    DocumentRequest(
                        dossier_id=dossier.id,
                        position=position,
                        title=item.title.strip(),
                        description=item.description,
                        document_type=item.document_type,
                        obligatoire=item.obligatoire,
                        quantite_min=item.quantite_min,
                        quantite_max=item.quantite_max,
                        accepted_formats=item.accepted_formats or "*",
                        max_size_mb=item.max_size_mb,
                        instructions=item.instructions,
                        due_date=item.due_date or draft.due_date,
                        status=RequestStatus.AWAITING.value,
                    )
                    for position, item in enumerate(draft.requests)
                ]
            )
        created = await self.get_by_id(dossier.id)
        if not created:
            raise ResourceNotFoundException("dossier", dossier.id)
        return created

    async def update_derived_state(
        self,
        dossier_id: str,
        status: DossierStatus,
        documents_requis: int,
        documents_upload: int,
        pourcentage: int,
        completed_at: datetime | None,
    ) -> None:
        """Persist recomputed status and counters; a VALIDATED row is left untouched."""
        await self.db.execute(
            update(Dossier)
            .where(
                Dossier.id == dossier_id,
                Dossier.status != DossierStatus.VALIDATED.value,
            )
            .values(
                status=status.value,
                documents_requis=documents_requis,
                documents_upload=documents_upload,
                pourcentage=pourcentage,
                completed_at=completed_at,
            )
        )

    async def mark_validated(
        self, dossier_id: str, validated_at: datetime, comment: str | None
    ) -> bool:
        """Set VALIDATED only if the dossier is still COMPLETE (optimistic lock).

        Returns True if exactly one row was updated; False if the status changed underneath.
        """
        result = await self.db.execute(
            update(Dossier)
            .where(
                Dossier.id == dossier_id,
                Dossier.status == DossierStatus.COMPLETE.value,
            )
            .values(
                status=DossierStatus.VALIDATED.value,
                validated_at=validated_at,
                validation_comment=comment,
            )
        )
        return result.rowcount == 1
