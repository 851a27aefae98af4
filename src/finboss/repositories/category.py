"""Category repository: defaults are shared, custom categories are user-scoped."""
from uuid import UUID

from sqlalchemy import or_, select, text
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from finboss.models.category import Category
from finboss.repositories.base import UserOwnedRepository


class CategoryRepository(UserOwnedRepository[Category]):
    """Repository for Category model."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Category)

    async def list_visible(
        self, user_id: UUID | None, type: str | None = None
    ) -> list[Category]:
        """Defaults, plus the user's own categories when a user is given."""
        if user_id is None:
            query = select(Category).where(Category.is_default.is_(True))
        else:
            query = select(Category).where(
                or_(Category.is_default.is_(True), Category.user_id == user_id)
            )
        if type:
            query = query.where(Category.type == type)
        result = await self.db.execute(query.order_by(Category.name))
        return list(result.scalars().all())

    async def name_taken(
        self, name: str, user_id: UUID, exclude_id: UUID | None = None
    ) -> bool:
        """True if ``name`` matches a default category or one owned by the user."""
        query = select(Category.id).where(
            Category.name == name,
            or_(Category.is_default.is_(True), Category.user_id == user_id),
        )
        if exclude_id is not None:
            query = query.where(Category.id != exclude_id)
        result = await self.db.execute(query)
        return result.first() is not None

    async def insert_default_if_absent(self, values: dict) -> bool:
        """Insert a default category unless one with the same name exists.

        Uses ON CONFLICT DO NOTHING against the partial unique index on
        default names, so concurrent startups never insert twice.
        """
        if self.db.bind.dialect.name == "postgresql":
            stmt = pg_insert(Category).on_conflict_do_nothing(
                index_elements=["name"], index_where=text("is_default")
            )
        else:
            stmt = sqlite_insert(Category).on_conflict_do_nothing(
                index_elements=["name"], index_where=text("is_default = 1")
            )
        result = await self.db.execute(stmt.values(**values))
        return (result.rowcount or 0) > 0
