"""Transaction repository with filtering and aggregation queries."""
from datetime import date
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from finboss.core.periods import DateRange
from finboss.models.transaction import Transaction
from finboss.repositories.base import UserOwnedRepository


def _in_range(query, date_range: DateRange | None):
    if date_range is None:
        return query
    if date_range.start is not None:
        query = query.where(Transaction.txn_date >= date_range.start)
    if date_range.end is not None:
        query = query.where(Transaction.txn_date <= date_range.end)
    return query


class TransactionRepository(UserOwnedRepository[Transaction]):
    """Repository for Transaction model with filtering and analytics queries."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Transaction)

    async def list_by_user(
        self,
        user_id: UUID,
        type: str | None = None,
        category: str | None = None,
        date_range: DateRange | None = None,
        skip: int = 0,
        limit: int = 20,
    ) -> tuple[list[Transaction], int]:
        """Filtered, paginated transactions (newest first) and the total match count."""
        query = select(Transaction).where(Transaction.user_id == user_id)
        if type:
            query = query.where(Transaction.type == type)
        if category:
            query = query.where(Transaction.category == category)
        query = _in_range(query, date_range)

        count_result = await self.db.execute(
            select(func.count()).select_from(query.subquery())
        )
        total = count_result.scalar() or 0

        result = await self.db.execute(
            query.order_by(Transaction.txn_date.desc(), Transaction.created_at.desc())
            .offset(skip)
            .limit(limit)
        )
        return list(result.scalars().all()), total

    async def totals_by_type(
        self, user_id: UUID, date_range: DateRange | None = None
    ) -> dict[str, float]:
        """
        Sum amounts per transaction type.
        Returns dict of {type: total}; types without records are absent.
        """
        query = (
            select(Transaction.type, func.sum(Transaction.amount).label("total"))
            .where(Transaction.user_id == user_id)
            .group_by(Transaction.type)
        )
        result = await self.db.execute(_in_range(query, date_range))
        return {row.type: float(row.total or 0) for row in result}

    async def totals_by_category(
        self, user_id: UUID, date_range: DateRange | None = None
    ) -> list[dict]:
        """Sum and count per category, largest total first."""
        total = func.sum(Transaction.amount).label("total")
        query = (
            select(
                Transaction.category,
                total,
                func.count(Transaction.id).label("count"),
                func.min(Transaction.type).label("type"),
            )
            .where(Transaction.user_id == user_id)
            .group_by(Transaction.category)
            .order_by(total.desc())
        )
        result = await self.db.execute(_in_range(query, date_range))
        return [
            {
                "category": row.category,
                "total": float(row.total or 0),
                "count": int(row.count),
                "type": row.type,
            }
            for row in result
        ]

    async def daily_totals(
        self,
        user_id: UUID,
        date_range: DateRange,
        type: str | None = None,
        category: str | None = None,
    ) -> list[tuple[date, str, float]]:
        """Per-day, per-type sums within a range, oldest day first."""
        query = (
            select(
                Transaction.txn_date,
                Transaction.type,
                func.sum(Transaction.amount).label("total"),
            )
            .where(Transaction.user_id == user_id)
            .group_by(Transaction.txn_date, Transaction.type)
            .order_by(Transaction.txn_date)
        )
        if type:
            query = query.where(Transaction.type == type)
        if category:
            query = query.where(Transaction.category == category)
        result = await self.db.execute(_in_range(query, date_range))
        return [(row.txn_date, row.type, float(row.total or 0)) for row in result]

    async def expense_totals_by_category(
        self,
        user_id: UUID,
        categories: list[str] | None = None,
        date_range: DateRange | None = None,
    ) -> dict[str, float]:
        """
        Aggregate expense spending by category.
        Returns dict of {category: total_amount}.
        """
        query = (
            select(Transaction.category, func.sum(Transaction.amount).label("total"))
            .where(Transaction.user_id == user_id, Transaction.type == "expense")
            .group_by(Transaction.category)
        )
        if categories is not None:
            query = query.where(Transaction.category.in_(categories))
        result = await self.db.execute(_in_range(query, date_range))
        return {row.category: float(row.total or 0) for row in result}

    async def expense_total(
        self, user_id: UUID, category: str, since: date
    ) -> float:
        """Total expense amount for one category from ``since`` onwards."""
        result = await self.db.execute(
            select(func.sum(Transaction.amount)).where(
                Transaction.user_id == user_id,
                Transaction.category == category,
                Transaction.type == "expense",
                Transaction.txn_date >= since,
            )
        )
        total = result.scalar_one_or_none()
        return float(total) if total else 0.0
