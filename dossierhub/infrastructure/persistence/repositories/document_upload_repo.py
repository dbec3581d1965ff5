"""Document upload repository: append-only ledger with compare-and-set status updates."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from dossierhub.application.dtos.dossier import DocumentUploadResult
from dossierhub.domain.enums import UploadStatus
from dossierhub.domain.value_objects import FileRef
from dossierhub.infrastructure.persistence.models.document_upload import DocumentUpload
from dossierhub.infrastructure.persistence.repositories.base import BaseRepository


def _upload_to_result(u: DocumentUpload) -> DocumentUploadResult:
    """Map ORM DocumentUpload to application DocumentUploadResult."""
    return DocumentUploadResult(
        id=u.id,
        request_id=u.request_id,
        file=FileRef(
            id=u.file_id,
            name=u.file_name,
            size=u.file_size,
            mime_type=u.mime_type,
        ),
        status=UploadStatus(u.status),
        submitted_at=u.submitted_at,
        sequence=u.sequence,
        submitted_by=u.submitted_by,
        reviewer_comment=u.reviewer_comment,
        decided_at=u.decided_at,
        decided_by=u.decided_by,
        replaced_by_id=u.replaced_by_id,
    )


async def load_uploads(
    db: AsyncSession, request_ids: list[str]
) -> dict[str, list[DocumentUploadResult]]:
    """Return uploads grouped by request id, oldest first within each request."""
    grouped: dict[str, list[DocumentUploadResult]] = {rid: [] for rid in request_ids}
    if not request_ids:
        return grouped
    result = await db.execute(
        select(DocumentUpload)
        .where(DocumentUpload.request_id.in_(request_ids))
        .order_by(DocumentUpload.request_id, DocumentUpload.sequence)
        .execution_options(populate_existing=True)
    )
    for row in result.scalars().all():
        grouped[row.request_id].append(_upload_to_result(row))
    return grouped


class DocumentUploadRepository(BaseRepository[DocumentUpload]):
    """Upload ledger. Rows are appended and re-statused, never deleted."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, DocumentUpload)

    async def get_by_id(self, upload_id: str) -> DocumentUploadResult | None:
        row = await self._get_orm_by_id(upload_id)
        return _upload_to_result(row) if row else None

    async def _next_sequence(self, request_id: str) -> int:
        result = await self.db.execute(
            select(func.coalesce(func.max(DocumentUpload.sequence), 0)).where(
                DocumentUpload.request_id == request_id
            )
        )
        return int(result.scalar() or 0) + 1

    async def append(
        self,
        request_id: str,
        file: FileRef,
        submitted_at: datetime,
        submitted_by: str | None = None,
    ) -> DocumentUploadResult:
        """Record a new PENDING upload at the end of the request ledger.

        Callers hold the request lock, so the sequence read here cannot race.
        """
        created = await self.create(
            DocumentUpload(
                request_id=request_id,
                sequence=await self._next_sequence(request_id),
                file_id=file.id,
                file_name=file.name,
                file_size=file.size,
                mime_type=file.mime_type,
                status=UploadStatus.PENDING.value,
                submitted_at=submitted_at,
                submitted_by=submitted_by,
            )
        )
        return _upload_to_result(created)

    async def mark_replaced(self, upload_id: str, replaced_by_id: str) -> bool:
        """Set REPLACED only if the upload is still REJECTED (optimistic lock).

        Returns True if exactly one row was updated.
        """
        result = await self.db.execute(
            update(DocumentUpload)
            .where(
                DocumentUpload.id == upload_id,
                DocumentUpload.status == UploadStatus.REJECTED.value,
            )
            .values(status=UploadStatus.REPLACED.value, replaced_by_id=replaced_by_id)
        )
        return result.rowcount == 1

    async def compare_and_set_status(
        self,
        upload_id: str,
        expected: frozenset[UploadStatus],
        new_status: UploadStatus,
        *,
        comment: str | None = None,
        decided_at: datetime | None = None,
        decided_by: str | None = None,
    ) -> bool:
        """Set new_status only if the current status is in expected.

        Returns True if exactly one row was updated; False if another reviewer won the race.
        """
        values: dict[str, object] = {"status": new_status.value}
        if comment is not None:
            values["reviewer_comment"] = comment
        if decided_at is not None:
            values["decided_at"] = decided_at
        if decided_by is not None:
            values["decided_by"] = decided_by
        result = await self.db.execute(
            update(DocumentUpload)
            .where(
                DocumentUpload.id == upload_id,
                DocumentUpload.status.in_([s.value for s in expected]),
            )
            .values(**values)
        )
        return result.rowcount == 1
