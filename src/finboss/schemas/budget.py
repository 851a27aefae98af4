"""Budget request/response schemas."""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import Field, field_validator

from finboss.schemas.common import MAX_AMOUNT, CamelModel, check_cents, strip_required

BudgetPeriod = Literal["monthly", "yearly"]
BudgetStatusValue = Literal["over", "warning", "ok"]


class BudgetCreate(CamelModel):
    """Request to create a budget."""

    category: str = Field(..., min_length=1, max_length=100)
    limit: float = Field(..., gt=0, le=MAX_AMOUNT, description="Spending limit for the period")
    period: BudgetPeriod = "monthly"

    @field_validator("limit")
    @classmethod
    def limit_in_cents(cls, v):
        return check_cents(v)

    @field_validator("category")
    @classmethod
    def category_not_blank(cls, v):
        return strip_required(v)


class BudgetUpdate(CamelModel):
    """Partial budget update."""

    limit: float | None = Field(default=None, gt=0, le=MAX_AMOUNT)
    period: BudgetPeriod | None = None

    @field_validator("limit")
    @classmethod
    def limit_in_cents(cls, v):
        return check_cents(v)


class BudgetResponse(CamelModel):
    """Budget definition with live spend figures."""

    id: UUID
    category: str
    limit: float
    period: str
    spent: float
    remaining: float
    percentage_used: float
    created_at: datetime
    updated_at: datetime


class BudgetStatus(CamelModel):
    """One row of the budget status overview."""

    id: UUID
    category: str
    limit: float
    spent: float
    remaining: float
    percentage_used: float
    period: str
    is_over_budget: bool
    is_near_budget: bool
    status: BudgetStatusValue
