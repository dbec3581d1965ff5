"""Service interfaces (ports) for external collaborators.

File bytes, identity and notification delivery live outside the workflow
core; it reaches them only through these Protocols.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, BinaryIO, Protocol

if TYPE_CHECKING:
    from dossierhub.application.dtos.identity import Actor
    from dossierhub.application.dtos.notification import Notification
    from dossierhub.domain.value_objects import FileRef


# File store interface
class IFileStore(Protocol):
    """Protocol for file byte storage. Returns opaque references."""

    async def save(
        self, file_data: BinaryIO, filename: str, mime_type: str
    ) -> FileRef:
        """Store bytes; return {id, name, size, mime_type}."""

    async def delete(self, file_id: str) -> bool:
        """Delete stored bytes. Returns True if deleted, False if not found."""


# Identity service interface
class IIdentityService(Protocol):
    """Protocol for resolving the acting client or accountant from a credential."""

    def resolve(self, token: str) -> Actor:
        """Return the actor; raise AuthenticationException when the credential is invalid."""


# Notification dispatcher interface
class INotificationDispatcher(Protocol):
    """Protocol for fire-and-forget delivery of status transitions."""

    async def dispatch(self, notification: Notification) -> None:
        """Deliver (or enqueue) the notification."""
