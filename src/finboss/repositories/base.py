"""Base repository with generic CRUD operations."""
from typing import Generic, Type, TypeVar
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from finboss.models.base import BaseModel

T = TypeVar("T", bound=BaseModel)


class BaseRepository(Generic[T]):
    """Generic repository providing CRUD operations for any model."""

    def __init__(self, db: AsyncSession, model: Type[T]):
        self.db = db
        self.model = model

    async def get_by_id(self, id: UUID) -> T | None:
        """Get a single record by ID."""
        result = await self.db.execute(select(self.model).where(self.model.id == id))
        return result.scalar_one_or_none()

    async def create(self, obj: T) -> T:
        """Create a new record."""
        self.db.add(obj)
        await self.db.commit()
        await self.db.refresh(obj)
        return obj

    async def update(self, obj: T, data: dict) -> T:
        """Apply ``data`` to a loaded record and persist it."""
        for key, value in data.items():
            if hasattr(obj, key):
                setattr(obj, key, value)

        await self.db.commit()
        await self.db.refresh(obj)
        return obj

    async def delete(self, obj: T) -> None:
        """Delete a loaded record."""
        await self.db.delete(obj)
        await self.db.commit()


class UserOwnedRepository(BaseRepository[T]):
    """Repository for models carrying a ``user_id`` owner column."""

    async def get_by_user(self, user_id: UUID, id: UUID) -> T | None:
        """Get a record only if it belongs to the specified user."""
        result = await self.db.execute(
            select(self.model).where(self.model.id == id, self.model.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def delete_all_by_user(self, user_id: UUID) -> int:
        """Delete every record owned by a user. Does not commit."""
        result = await self.db.execute(
            delete(self.model).where(self.model.user_id == user_id)
        )
        return result.rowcount or 0
