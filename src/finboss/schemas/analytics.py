"""Analytics response schemas."""

from pydantic import Field

from finboss.schemas.common import CamelModel


class BudgetComparison(CamelModel):
    """Budget vs. actual spending for one budget."""

    category: str
    budgeted: float
    actual: float
    variance: float = Field(description="budgeted - actual; negative means over budget")
    variance_percent: float
    period: str
