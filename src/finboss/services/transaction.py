"""Transaction service: owner-scoped CRUD and aggregate views."""

import math
from datetime import date
from uuid import UUID

from finboss.core.exceptions import NotFoundError
from finboss.core.periods import DateRange, shift_months
from finboss.models.transaction import Transaction
from finboss.repositories.transaction import TransactionRepository
from finboss.schemas.common import PaginationMeta
from finboss.schemas.transaction import (
    CategoryTotal,
    SpendingForecast,
    TransactionCreate,
    TransactionListResult,
    TransactionResponse,
    TransactionSummary,
    TransactionUpdate,
    TrendPoint,
)
from finboss.services import trends as trend_math
from finboss.services.trends import FORECAST_HISTORY_MONTHS


class TransactionService:
    """Service for transaction operations."""

    def __init__(self, transaction_repo: TransactionRepository):
        self.repo = transaction_repo

    async def create(self, user_id: UUID, data: TransactionCreate) -> Transaction:
        transaction = Transaction(
            user_id=user_id,
            type=data.type,
            amount=data.amount,
            category=data.category.strip(),
            description=data.description,
            txn_date=data.date or date.today(),
        )
        return await self.repo.create(transaction)

    async def list_for_user(
        self,
        user_id: UUID,
        type: str | None,
        category: str | None,
        date_range: DateRange,
        page: int,
        limit: int,
    ) -> TransactionListResult:
        transactions, total = await self.repo.list_by_user(
            user_id,
            type=type,
            category=category,
            date_range=date_range,
            skip=(page - 1) * limit,
            limit=limit,
        )
        return TransactionListResult(
            transactions=[TransactionResponse.model_validate(t) for t in transactions],
            pagination=PaginationMeta(
                total=total,
                page=page,
                limit=limit,
                pages=math.ceil(total / limit) if total else 0,
            ),
        )

    async def get(self, user_id: UUID, transaction_id: UUID) -> Transaction:
        """
        Get a transaction owned by the user.

        Raises:
            NotFoundError: If missing or owned by someone else
        """
        transaction = await self.repo.get_by_user(user_id, transaction_id)
        if transaction is None:
            raise NotFoundError("Transaction not found")
        return transaction

    async def update(
        self, user_id: UUID, transaction_id: UUID, data: TransactionUpdate
    ) -> Transaction:
        transaction = await self.get(user_id, transaction_id)
        changes = data.model_dump(exclude_unset=True)
        if "date" in changes:
            txn_date = changes.pop("date")
            if txn_date is not None:
                changes["txn_date"] = txn_date
        if changes.get("category"):
            changes["category"] = changes["category"].strip()
        # type, amount and category are required columns
        changes = {
            key: value
            for key, value in changes.items()
            if value is not None or key == "description"
        }
        return await self.repo.update(transaction, changes)

    async def delete(self, user_id: UUID, transaction_id: UUID) -> Transaction:
        transaction = await self.get(user_id, transaction_id)
        await self.repo.delete(transaction)
        return transaction

    async def summary(
        self, user_id: UUID, date_range: DateRange | None = None
    ) -> TransactionSummary:
        """Income and expense totals in one grouped query; missing types count as 0."""
        totals = await self.repo.totals_by_type(user_id, date_range)
        income = totals.get("income", 0.0)
        expense = totals.get("expense", 0.0)
        return TransactionSummary(
            income=round(income, 2),
            expense=round(expense, 2),
            balance=round(income - expense, 2),
        )

    async def by_category(
        self, user_id: UUID, date_range: DateRange | None = None
    ) -> list[CategoryTotal]:
        rows = await self.repo.totals_by_category(user_id, date_range)
        return [CategoryTotal(**row) for row in rows]

    async def trends(
        self,
        user_id: UUID,
        date_range: DateRange,
        group_by: str = "day",
        type: str | None = None,
    ) -> list[TrendPoint]:
        rows = await self.repo.daily_totals(user_id, date_range, type=type)
        return [TrendPoint(**bucket) for bucket in trend_math.roll_up(rows, group_by)]

    async def forecast(
        self,
        user_id: UUID,
        months: int = 3,
        category: str | None = None,
        today: date | None = None,
    ) -> SpendingForecast:
        """
        Project expense spending from the last three full calendar months.

        Args:
            user_id: Owner
            months: Months to project (1-12)
            category: Restrict history to one category
            today: Reference day (defaults to today)

        Returns:
            Historical monthly average, projection and confidence
        """
        current_month = (today or date.today()).replace(day=1)
        history = DateRange(
            start=shift_months(current_month, -FORECAST_HISTORY_MONTHS),
            end=current_month - date.resolution,
        )
        rows = await self.repo.daily_totals(
            user_id, history, type="expense", category=category
        )
        observed = [
            total for total in trend_math.monthly_totals(rows).values() if total > 0
        ]
        return SpendingForecast(**trend_math.project(observed, months))
