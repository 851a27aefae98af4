"""Budget service: attaches live spend figures to budget definitions."""

import logging
from datetime import date
from uuid import UUID

from finboss.core.exceptions import ConflictError, NotFoundError
from finboss.core.periods import DateRange, period_start
from finboss.models.budget import Budget
from finboss.repositories.budget import BudgetRepository
from finboss.repositories.transaction import TransactionRepository
from finboss.schemas.budget import BudgetCreate, BudgetResponse, BudgetStatus, BudgetUpdate

logger = logging.getLogger(__name__)

WARNING_THRESHOLD = 0.8
STATUS_ORDER = {"over": 0, "warning": 1, "ok": 2}


def budget_status(limit: float, spent: float) -> str:
    """Classify spend against a limit: over, warning (above 80%) or ok."""
    if spent > limit:
        return "over"
    if spent > limit * WARNING_THRESHOLD:
        return "warning"
    return "ok"


def decorate(budget: Budget, spent: float) -> BudgetResponse:
    """Budget plus spent, remaining and percentage used. percentageUsed may exceed 100."""
    return BudgetResponse(
        id=budget.id,
        category=budget.category,
        limit=budget.limit,
        period=budget.period,
        spent=spent,
        remaining=budget.limit - spent,
        percentage_used=(spent / budget.limit) * 100,
        created_at=budget.created_at,
        updated_at=budget.updated_at,
    )


def status_row(budget: Budget, spent: float) -> BudgetStatus:
    status = budget_status(budget.limit, spent)
    return BudgetStatus(
        id=budget.id,
        category=budget.category,
        limit=budget.limit,
        spent=spent,
        remaining=budget.limit - spent,
        percentage_used=(spent / budget.limit) * 100,
        period=budget.period,
        is_over_budget=status == "over",
        is_near_budget=spent > budget.limit * WARNING_THRESHOLD,
        status=status,
    )


def spent_key(category: str, period: str) -> tuple[str, str]:
    return (category, period)


class BudgetService:
    """Service for budget operations."""

    def __init__(
        self, budget_repo: BudgetRepository, transaction_repo: TransactionRepository
    ):
        self.repo = budget_repo
        self.transactions = transaction_repo

    async def spent_for_category(
        self, user_id: UUID, category: str, period: str, today: date | None = None
    ) -> float:
        """Expense total for one category since the start of the current period."""
        return await self.transactions.expense_total(
            user_id, category, period_start(period, today=today)
        )

    async def batch_spent(
        self, user_id: UUID, budgets: list[Budget], today: date | None = None
    ) -> dict[tuple[str, str], float]:
        """
        Spend for many budgets with one aggregate per distinct period.

        Returns:
            ``{(category, period): spent}``; budgets without expenses are absent
        """
        result: dict[tuple[str, str], float] = {}
        periods = sorted({budget.period for budget in budgets})
        for period in periods:
            categories = sorted({b.category for b in budgets if b.period == period})
            totals = await self.transactions.expense_totals_by_category(
                user_id,
                categories=categories,
                date_range=DateRange(start=period_start(period, today=today)),
            )
            for category, total in totals.items():
                result[spent_key(category, period)] = total
        return result

    async def create(self, user_id: UUID, data: BudgetCreate) -> BudgetResponse:
        """
        Create a budget.

        Raises:
            ConflictError: If a budget already exists for this category and period
        """
        category = data.category.strip()
        if await self.repo.find_existing(user_id, category, data.period):
            raise ConflictError(
                f"Budget already exists for {category} in {data.period} period"
            )

        budget = await self.repo.create(
            Budget(user_id=user_id, category=category, limit=data.limit, period=data.period)
        )
        spent = await self.spent_for_category(user_id, budget.category, budget.period)
        return decorate(budget, spent)

    async def list_for_user(
        self, user_id: UUID, period: str | None = None
    ) -> list[BudgetResponse]:
        budgets = await self.repo.list_by_user(user_id, period=period)
        spent = await self.batch_spent(user_id, budgets)
        return [
            decorate(b, spent.get(spent_key(b.category, b.period), 0.0)) for b in budgets
        ]

    async def _get_owned(self, user_id: UUID, budget_id: UUID) -> Budget:
        budget = await self.repo.get_by_user(user_id, budget_id)
        if budget is None:
            raise NotFoundError("Budget not found")
        return budget

    async def get(self, user_id: UUID, budget_id: UUID) -> BudgetResponse:
        budget = await self._get_owned(user_id, budget_id)
        spent = await self.spent_for_category(user_id, budget.category, budget.period)
        return decorate(budget, spent)

    async def update(
        self, user_id: UUID, budget_id: UUID, data: BudgetUpdate
    ) -> BudgetResponse:
        budget = await self._get_owned(user_id, budget_id)
        changes = {k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None}

        new_period = changes.get("period")
        if new_period and new_period != budget.period:
            if await self.repo.find_existing(user_id, budget.category, new_period):
                raise ConflictError(
                    f"Budget already exists for {budget.category} in {new_period} period"
                )

        if changes:
            budget = await self.repo.update(budget, changes)
        spent = await self.spent_for_category(user_id, budget.category, budget.period)
        return decorate(budget, spent)

    async def delete(self, user_id: UUID, budget_id: UUID) -> BudgetResponse:
        budget = await self._get_owned(user_id, budget_id)
        spent = await self.spent_for_category(user_id, budget.category, budget.period)
        response = decorate(budget, spent)
        await self.repo.delete(budget)
        return response

    async def status_overview(self, user_id: UUID) -> list[BudgetStatus]:
        """All budgets with status, ordered over, then warning, then ok."""
        budgets = await self.repo.list_by_user(user_id, order_by_category=False)
        spent = await self.batch_spent(user_id, budgets)
        rows = [
            status_row(b, spent.get(spent_key(b.category, b.period), 0.0)) for b in budgets
        ]
        rows.sort(key=lambda row: STATUS_ORDER[row.status])
        over = sum(1 for row in rows if row.status == "over")
        if over:
            logger.info(
                "Budgets over limit", extra={"user_id": str(user_id), "over_budget": over}
            )
        return rows
