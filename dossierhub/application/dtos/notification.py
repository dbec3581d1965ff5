"""DTO passed to the notification dispatcher."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from dossierhub.domain.enums import NotificationKind


@dataclass(frozen=True)
class Notification:
    """A status transition worth telling someone about (fire-and-forget)."""

    kind: NotificationKind
    dossier_id: str
    occurred_at: datetime
    client_id: str | None = None
    request_id: str | None = None
    upload_id: str | None = None
    details: dict[str, Any] = field(default_factory=dict)
