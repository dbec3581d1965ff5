"""Validation processor: archive a complete dossier (terminal VALIDATED status)."""

from __future__ import annotations

from dossierhub.application.dtos.dossier import DossierResult
from dossierhub.application.dtos.notification import Notification
from dossierhub.application.interfaces.repositories import IDossierRepository
from dossierhub.application.interfaces.services import INotificationDispatcher
from dossierhub.application.services.notifications import dispatch_safely
from dossierhub.application.use_cases.dossiers.recompute_dossier_state import (
    RecomputeDossierStateUseCase,
)
from dossierhub.domain.entities.dossier import ensure_finalizable
from dossierhub.domain.enums import NotificationKind
from dossierhub.domain.exceptions import ResourceNotFoundException
from dossierhub.shared.telemetry.logging import get_logger
from dossierhub.shared.utils.datetime import utc_now

logger = get_logger(__name__)


class FinalizeDossierUseCase:
    """COMPLETE -> VALIDATED, once."""

    def __init__(
        self,
        dossier_repo: IDossierRepository,
        recompute: RecomputeDossierStateUseCase,
        notifier: INotificationDispatcher | None = None,
    ) -> None:
        self._dossier_repo = dossier_repo
        self._recompute = recompute
        self._notifier = notifier

    async def execute(self, dossier_id: str, comment: str | None = None) -> DossierResult:
        """Validate the dossier.

        Raises:
            ResourceNotFoundException: If the dossier does not exist.
            AlreadyFinalizedException: If already VALIDATED.
            InvalidStateTransitionException: If the dossier is not COMPLETE.
        """
        outcome = await self._recompute.execute(dossier_id)
        dossier = outcome.dossier
        ensure_finalizable(dossier_id, dossier.status)

        validated_at = utc_now()
        if not await self._dossier_repo.mark_validated(dossier_id, validated_at, comment):
            # Status changed between read and write (e.g. concurrent finalize).
            status = await self._dossier_repo.get_status(dossier_id)
            if status is None:
                raise ResourceNotFoundException("dossier", dossier_id)
            ensure_finalizable(dossier_id, status)
        finalized = await self._dossier_repo.get_by_id(dossier_id)
        if not finalized:
            raise ResourceNotFoundException("dossier", dossier_id)
        logger.info("Dossier %s validated", dossier_id)
        await dispatch_safely(
            self._notifier,
            [
                Notification(
                    kind=NotificationKind.DOSSIER_FINALIZED,
                    dossier_id=dossier_id,
                    client_id=finalized.client_id,
                    occurred_at=validated_at,
                    details={"comment": comment} if comment else {},
                )
            ],
        )
        return finalized
