"""Infrastructure service adapters."""

from dossierhub.infrastructure.services.notification_dispatcher import (
    LogOnlyNotificationDispatcher,
)

__all__ = ["LogOnlyNotificationDispatcher"]
