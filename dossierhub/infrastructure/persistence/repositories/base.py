"""Base repository: generic ORM access shared by the dossier repositories."""

from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from dossierhub.infrastructure.persistence.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository with ORM lookup, create and update.

    Subclasses expose application DTOs; ORM instances never leave the repository.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def _get_orm_by_id(
        self, entity_id: str, *, for_update: bool = False
    ) -> ModelType | None:
        """Return a single ORM record by primary key, or None.

        Always refreshes identity-map state from the row so snapshots are current.
        for_update takes a row lock held until the transaction ends.
        """
        model: Any = self.model
        stmt = (
            select(self.model)
            .where(model.id == entity_id)
            .execution_options(populate_existing=True)
        )
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, obj: ModelType) -> ModelType:
        """Persist a new record and return it with server defaults loaded."""
        self.db.add(obj)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def create_all(self, objs: list[Any]) -> None:
        """Persist several new records in one flush."""
        self.db.add_all(objs)
        await self.db.flush()
