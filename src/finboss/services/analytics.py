"""Budget vs. actual comparison."""

from decimal import ROUND_HALF_UP, Decimal
from uuid import UUID

from finboss.core.periods import DateRange
from finboss.repositories.budget import BudgetRepository
from finboss.repositories.transaction import TransactionRepository
from finboss.schemas.analytics import BudgetComparison

CENT = Decimal("0.01")


def round_money(value: float) -> float:
    """Round half-up to 2 decimal places (2.675 -> 2.68)."""
    return float(Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP))


def compare_budget(category: str, budgeted: float, actual: float, period: str) -> BudgetComparison:
    variance = budgeted - actual
    variance_percent = (variance / budgeted) * 100 if budgeted > 0 else 0.0
    return BudgetComparison(
        category=category,
        budgeted=round_money(budgeted),
        actual=round_money(actual),
        variance=round_money(variance),
        variance_percent=round_money(variance_percent),
        period=period,
    )


class AnalyticsService:
    """Service for cross-resource reports."""

    def __init__(
        self, budget_repo: BudgetRepository, transaction_repo: TransactionRepository
    ):
        self.budgets = budget_repo
        self.transactions = transaction_repo

    async def compare(
        self, user_id: UUID, date_range: DateRange | None = None
    ) -> list[BudgetComparison]:
        """
        Compare every budget against expense spending in its category.

        Unlike budget status, actuals cover the given range (all time when
        unbounded) rather than the budget's current period.

        Returns:
            Rows sorted by variance, most over budget first
        """
        budgets = await self.budgets.list_by_user(user_id, order_by_category=False)
        if not budgets:
            return []

        actuals = await self.transactions.expense_totals_by_category(
            user_id, date_range=date_range
        )
        rows = [
            compare_budget(
                budget.category, budget.limit, actuals.get(budget.category, 0.0), budget.period
            )
            for budget in budgets
        ]
        rows.sort(key=lambda row: row.variance)
        return rows
