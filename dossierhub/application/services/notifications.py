"""Fire-and-forget notification helper used by use cases."""

from __future__ import annotations

from typing import TYPE_CHECKING

from dossierhub.shared.telemetry.logging import get_logger

if TYPE_CHECKING:
    from dossierhub.application.dtos.notification import Notification
    from dossierhub.application.interfaces.services import INotificationDispatcher

logger = get_logger(__name__)


async def dispatch_safely(
    dispatcher: INotificationDispatcher | None,
    notifications: list[Notification],
) -> None:
    """Send each notification; delivery failures are logged and never fail the caller."""
    if dispatcher is None:
        return
    for notification in notifications:
        try:
            await dispatcher.dispatch(notification)
        except Exception:
            logger.exception(
                "Notification dispatch failed (kind=%s, dossier_id=%s)",
                notification.kind.value,
                notification.dossier_id,
            )
