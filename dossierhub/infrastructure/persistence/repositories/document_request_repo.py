"""Document request repository. Owns the per-request write lock used by submissions."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from dossierhub.application.dtos.dossier import DocumentRequestResult, DocumentUploadResult
from dossierhub.domain.enums import RequestStatus
from dossierhub.infrastructure.persistence.models.document_request import DocumentRequest
from dossierhub.infrastructure.persistence.repositories.base import BaseRepository
from dossierhub.infrastructure.persistence.repositories.document_upload_repo import (
    load_uploads,
)


def _request_to_result(
    r: DocumentRequest, uploads: list[DocumentUploadResult]
) -> DocumentRequestResult:
    """Map ORM DocumentRequest plus its ledger to application DocumentRequestResult."""
    return DocumentRequestResult(
        id=r.id,
        dossier_id=r.dossier_id,
        title=r.title,
        description=r.description,
        document_type=r.document_type,
        obligatoire=r.obligatoire,
        quantite_min=r.quantite_min,
        quantite_max=r.quantite_max,
        status=RequestStatus(r.status),
        accepted_formats=r.accepted_formats,
        max_size_mb=r.max_size_mb,
        instructions=r.instructions,
        due_date=r.due_date,
        position=r.position,
        uploads=uploads,
    )


async def load_requests(
    db: AsyncSession, dossier_ids: list[str]
) -> dict[str, list[DocumentRequestResult]]:
    """Return requests (with uploads) grouped by dossier id, ordered by position."""
    grouped: dict[str, list[DocumentRequestResult]] = {did: [] for did in dossier_ids}
    if not dossier_ids:
        return grouped
    result = await db.execute(
        select(DocumentRequest)
        .where(DocumentRequest.dossier_id.in_(dossier_ids))
        .order_by(DocumentRequest.dossier_id, DocumentRequest.position)
        .execution_options(populate_existing=True)
    )
    rows = list(result.scalars().all())
    uploads = await load_uploads(db, [r.id for r in rows])
    for row in rows:
        grouped[row.dossier_id].append(_request_to_result(row, uploads[row.id]))
    return grouped


class DocumentRequestRepository(BaseRepository[DocumentRequest]):
    """Document requests with their upload ledger."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, DocumentRequest)

    async def _snapshot(self, row: DocumentRequest) -> DocumentRequestResult:
        uploads = await load_uploads(self.db, [row.id])
        return _request_to_result(row, uploads[row.id])

    async def get_by_id(self, request_id: str) -> DocumentRequestResult | None:
        row = await self._get_orm_by_id(request_id)
        return await self._snapshot(row) if row else None

    @asynccontextmanager
    async def locked(
        self, request_id: str
    ) -> AsyncIterator[DocumentRequestResult | None]:
        """Lock the request row (SELECT ... FOR UPDATE) and yield a fresh snapshot.

        The lock is released when the surrounding transaction commits or rolls
        back, so concurrent submissions to one request are serialized.
        """
        row = await self._get_orm_by_id(request_id, for_update=True)
        snapshot = await self._snapshot(row) if row else None
        yield snapshot

    async def update_status(self, request_id: str, status: RequestStatus) -> None:
        await self.db.execute(
            update(DocumentRequest)
            .where(DocumentRequest.id == request_id)
            .values(status=status.value)
        )
