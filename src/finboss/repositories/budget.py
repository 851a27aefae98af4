"""Budget repository with user-scoped queries."""
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from finboss.models.budget import Budget
from finboss.repositories.base import UserOwnedRepository


class BudgetRepository(UserOwnedRepository[Budget]):
    """Repository for Budget model with user-scoped security."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Budget)

    async def list_by_user(
        self, user_id: UUID, period: str | None = None, order_by_category: bool = True
    ) -> list[Budget]:
        """All budgets of a user, optionally for one period."""
        query = select(Budget).where(Budget.user_id == user_id)
        if period:
            query = query.where(Budget.period == period)
        if order_by_category:
            query = query.order_by(Budget.category)
        else:
            query = query.order_by(Budget.created_at)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def find_existing(
        self, user_id: UUID, category: str, period: str
    ) -> Budget | None:
        """Budget for the same (user, category, period), if any."""
        result = await self.db.execute(
            select(Budget).where(
                Budget.user_id == user_id,
                Budget.category == category,
                Budget.period == period,
            )
        )
        return result.scalar_one_or_none()
