"""DTO for the authenticated caller resolved by the identity service."""

from dataclasses import dataclass

from dossierhub.domain.enums import ActorRole


@dataclass(frozen=True)
class Actor:
    """Acting client or accountant."""

    user_id: str
    role: ActorRole
    client_id: str | None = None  # set for client actors

    @property
    def is_accountant(self) -> bool:
        return self.role == ActorRole.ACCOUNTANT
