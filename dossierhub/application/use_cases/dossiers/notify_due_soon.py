"""Due-date reminders: notify about dossiers approaching their due date."""

from __future__ import annotations

from datetime import timedelta

from dossierhub.application.dtos.notification import Notification
from dossierhub.application.interfaces.repositories import IDossierRepository
from dossierhub.application.interfaces.services import INotificationDispatcher
from dossierhub.application.services.notifications import dispatch_safely
from dossierhub.domain.enums import NotificationKind
from dossierhub.shared.telemetry.logging import get_logger
from dossierhub.shared.utils.datetime import utc_now

logger = get_logger(__name__)


class NotifyDueSoonUseCase:
    """Dispatch DUE_DATE_APPROACHING for non-validated dossiers due within the window."""

    def __init__(
        self,
        dossier_repo: IDossierRepository,
        notifier: INotificationDispatcher,
        due_soon_days: int = 3,
    ) -> None:
        self._dossier_repo = dossier_repo
        self._notifier = notifier
        self._due_soon_days = due_soon_days

    async def execute(self) -> int:
        """Return the number of reminders dispatched."""
        now = utc_now()
        dossiers = await self._dossier_repo.list_due_between(
            now, now + timedelta(days=self._due_soon_days)
        )
        notifications = [
            Notification(
                kind=NotificationKind.DUE_DATE_APPROACHING,
                dossier_id=d.id,
                client_id=d.client_id,
                occurred_at=now,
                details={
                    "due_date": d.due_date.isoformat() if d.due_date else None,
                    "pourcentage": d.pourcentage,
                },
            )
            for d in dossiers
        ]
        await dispatch_safely(self._notifier, notifications)
        logger.info("Dispatched %d due-date reminder(s)", len(notifications))
        return len(notifications)
