"""Notification dispatcher: log-only implementation (no email/push configured)."""

import logging

from dossierhub.application.dtos.notification import Notification

logger = logging.getLogger(__name__)


class LogOnlyNotificationDispatcher:
    """INotificationDispatcher implementation that logs instead of delivering.

    Use when no email or push channel is configured. Production can swap in a
    queue-based implementation; callers never wait on delivery.
    """

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled

    async def dispatch(self, notification: Notification) -> None:
        """Log the notification; nothing is sent."""
        if not self.enabled:
            return
        logger.info(
            "Notify %s: dossier=%s request=%s upload=%s",
            notification.kind.value,
            notification.dossier_id,
            notification.request_id,
            notification.upload_id,
        )
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Notification details: client=%s at %s %s",
                notification.client_id,
                notification.occurred_at.isoformat(),
                notification.details,
            )
