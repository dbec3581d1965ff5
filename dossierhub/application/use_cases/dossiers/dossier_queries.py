"""Read-side queries: dossier detail, client listings, progress boards."""

from __future__ import annotations

from datetime import timedelta

from dossierhub.application.dtos.dossier import DossierResult
from dossierhub.application.dtos.progress import (
    AccountantProgressSummary,
    ClientDossierList,
    ClientDossierSummary,
    DossierProgress,
    DossierProgressRow,
)
from dossierhub.application.interfaces.repositories import IDossierRepository
from dossierhub.application.services.progress_aggregator import compute_progress
from dossierhub.application.services.request_status_deriver import (
    with_current_request_statuses,
)
from dossierhub.domain.enums import DossierStatus
from dossierhub.domain.exceptions import ResourceNotFoundException
from dossierhub.shared.utils.datetime import ensure_utc, utc_now

_COMPLETED = frozenset({DossierStatus.COMPLETE, DossierStatus.VALIDATED})


def is_urgent(dossier: DossierResult, due_soon_days: int) -> bool:
    """Due within due_soon_days (or overdue) and not yet VALIDATED."""
    due = ensure_utc(dossier.due_date)
    if due is None or dossier.status == DossierStatus.VALIDATED:
        return False
    return due <= utc_now() + timedelta(days=due_soon_days)


class DossierQueryService:
    """Dossier reads. Progress and request statuses are derived at read time, never stored."""

    def __init__(self, dossier_repo: IDossierRepository, due_soon_days: int = 3) -> None:
        self._dossier_repo = dossier_repo
        self._due_soon_days = due_soon_days

    async def get_dossier(self, dossier_id: str) -> DossierResult:
        dossier = await self._dossier_repo.get_by_id(dossier_id)
        if not dossier:
            raise ResourceNotFoundException("dossier", dossier_id)
        return with_current_request_statuses(dossier, utc_now())

    async def get_progress(self, dossier_id: str) -> DossierProgress:
        """Return documents_requis, documents_upload, pourcentage and status."""
        return compute_progress(await self.get_dossier(dossier_id))

    async def list_client_dossiers(self, client_id: str) -> ClientDossierList:
        """Return the client's dossiers with status counts and urgent flags."""
        now = utc_now()
        dossiers = [
            with_current_request_statuses(d, now)
            for d in await self._dossier_repo.list_by_client(client_id)
        ]
        urgent_ids = frozenset(
            d.id for d in dossiers if is_urgent(d, self._due_soon_days)
        )
        counts = {status: 0 for status in DossierStatus}
        for d in dossiers:
            counts[d.status] += 1
        summary = ClientDossierSummary(
            total=len(dossiers),
            pending=counts[DossierStatus.PENDING],
            in_progress=counts[DossierStatus.IN_PROGRESS],
            complete=counts[DossierStatus.COMPLETE],
            validated=counts[DossierStatus.VALIDATED],
            urgent=len(urgent_ids),
        )
        return ClientDossierList(dossiers=dossiers, summary=summary, urgent_ids=urgent_ids)

    async def accountant_progress(self, accountant_id: str) -> AccountantProgressSummary:
        """Progress board across every dossier the accountant owns."""
        now = utc_now()
        dossiers = [
            with_current_request_statuses(d, now)
            for d in await self._dossier_repo.list_by_accountant(accountant_id)
        ]
        rows = [
            DossierProgressRow(
                dossier_id=d.id,
                name=d.name,
                client_id=d.client_id,
                progress=compute_progress(d),
            )
            for d in dossiers
        ]
        completed = sum(1 for r in rows if r.progress.status in _COMPLETED)
        return AccountantProgressSummary(
            dossiers=rows,
            total_dossiers=len(rows),
            completed_dossiers=completed,
            pending_dossiers=len(rows) - completed,
        )
