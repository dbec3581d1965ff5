"""Recompute derived request and dossier state after a ledger or decision mutation."""

from __future__ import annotations

from dataclasses import dataclass

from dossierhub.application.dtos.dossier import DossierResult
from dossierhub.application.dtos.notification import Notification
from dossierhub.application.interfaces.repositories import (
    IDocumentRequestRepository,
    IDossierRepository,
)
from dossierhub.application.services.progress_aggregator import compute_progress
from dossierhub.application.services.request_status_deriver import derive_request_status
from dossierhub.domain.enums import DossierStatus, NotificationKind
from dossierhub.domain.exceptions import ResourceNotFoundException
from dossierhub.shared.telemetry.logging import get_logger
from dossierhub.shared.utils.datetime import utc_now

logger = get_logger(__name__)


@dataclass(frozen=True)
class RecomputeOutcome:
    """Dossier after recomputation and the status it had before."""

    dossier: DossierResult
    previous_status: DossierStatus

    @property
    def became_complete(self) -> bool:
        return (
            self.previous_status != DossierStatus.COMPLETE
            and self.dossier.status == DossierStatus.COMPLETE
        )

    def transition_notifications(self) -> list[Notification]:
        """Dossier-level notifications implied by this recomputation."""
        if not self.became_complete:
            return []
        return [
            Notification(
                kind=NotificationKind.DOSSIER_COMPLETED,
                dossier_id=self.dossier.id,
                client_id=self.dossier.client_id,
                occurred_at=self.dossier.completed_at or utc_now(),
            )
        ]


class RecomputeDossierStateUseCase:
    """Re-derives every request status and the dossier progress, persisting only changes.

    Idempotent: running it twice without an intervening mutation writes nothing
    the second time. A VALIDATED dossier is returned untouched.
    """

    def __init__(
        self,
        dossier_repo: IDossierRepository,
        request_repo: IDocumentRequestRepository,
    ) -> None:
        self._dossier_repo = dossier_repo
        self._request_repo = request_repo

    async def execute(self, dossier_id: str) -> RecomputeOutcome:
        dossier = await self._dossier_repo.get_by_id(dossier_id)
        if not dossier:
            raise ResourceNotFoundException("dossier", dossier_id)
        if dossier.status == DossierStatus.VALIDATED:
            return RecomputeOutcome(dossier=dossier, previous_status=dossier.status)

        now = utc_now()
        for request in dossier.requests:
            status = derive_request_status(request, now)
            if status != request.status:
                await self._request_repo.update_status(request.id, status)
                logger.info(
                    "Request %s status %s -> %s",
                    request.id,
                    request.status.value,
                    status.value,
                )

        progress = compute_progress(dossier)
        if progress.status == DossierStatus.COMPLETE:
            completed_at = dossier.completed_at or now
        else:
            completed_at = None
        changed = (
            progress.status != dossier.status
            or progress.documents_requis != dossier.documents_requis
            or progress.documents_upload != dossier.documents_upload
            or progress.pourcentage != dossier.pourcentage
            or completed_at != dossier.completed_at
        )
        if changed:
            await self._dossier_repo.update_derived_state(
                dossier_id,
                status=progress.status,
                documents_requis=progress.documents_requis,
                documents_upload=progress.documents_upload,
                pourcentage=progress.pourcentage,
                completed_at=completed_at,
            )
            if progress.status != dossier.status:
                logger.info(
                    "Dossier %s status %s -> %s (%d%%)",
                    dossier_id,
                    dossier.status.value,
                    progress.status.value,
                    progress.pourcentage,
                )
        refreshed = await self._dossier_repo.get_by_id(dossier_id)
        if not refreshed:
            raise ResourceNotFoundException("dossier", dossier_id)
        return RecomputeOutcome(dossier=refreshed, previous_status=dossier.status)
