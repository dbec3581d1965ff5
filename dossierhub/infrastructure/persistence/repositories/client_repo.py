"""Client repository. Returns application DTOs."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from dossierhub.application.dtos.dossier import ClientResult
from dossierhub.infrastructure.persistence.models.client import Client
from dossierhub.infrastructure.persistence.repositories.base import BaseRepository


def _client_to_result(c: Client) -> ClientResult:
    """Map ORM Client to application ClientResult."""
    return ClientResult(
        id=c.id,
        accountant_id=c.accountant_id,
        company_name=c.company_name,
        email=c.email,
        activity_type=c.activity_type,
    )


class ClientRepository(BaseRepository[Client]):
    """Client lookups for dossier creation and listings."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Client)

    async def get_by_id(self, client_id: str) -> ClientResult | None:
        row = await self._get_orm_by_id(client_id)
        return _client_to_result(row) if row else None

    async def list_by_accountant(self, accountant_id: str) -> list[ClientResult]:
        result = await self.db.execute(
            select(Client)
            .where(Client.accountant_id == accountant_id)
            .order_by(Client.company_name)
        )
        return [_client_to_result(c) for c in result.scalars().all()]

    async def create_client(
        self,
        accountant_id: str,
        company_name: str,
        email: str | None = None,
        activity_type: str | None = None,
    ) -> ClientResult:
        """Create a client (used by seeding and administration scripts)."""
        created = await self.create(
            Client(
                accountant_id=accountant_id,
                company_name=company_name,
                email=email,
                activity_type=activity_type,
            )
        )
        return _client_to_result(created)
