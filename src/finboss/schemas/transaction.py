"""Transaction request/response schemas."""

from datetime import date as Date, datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from finboss.schemas.common import (
    MAX_AMOUNT,
    CamelModel,
    PaginationMeta,
    check_cents,
    strip_required,
)

TransactionType = Literal["income", "expense"]
GroupBy = Literal["day", "week", "month"]


class TransactionCreate(CamelModel):
    """Request to record a transaction."""

    type: TransactionType
    amount: float = Field(..., gt=0, le=MAX_AMOUNT, description="Positive amount, at most 2 dp")
    category: str = Field(..., min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    date: Date | None = Field(default=None, description="Defaults to today")

    @field_validator("amount")
    @classmethod
    def amount_in_cents(cls, v):
        return check_cents(v)

    @field_validator("category")
    @classmethod
    def category_not_blank(cls, v):
        return strip_required(v)


class TransactionUpdate(CamelModel):
    """Partial transaction update."""

    type: TransactionType | None = None
    amount: float | None = Field(default=None, gt=0, le=MAX_AMOUNT)
    category: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    date: Date | None = None

    @field_validator("amount")
    @classmethod
    def amount_in_cents(cls, v):
        return check_cents(v)

    @field_validator("category")
    @classmethod
    def category_not_blank(cls, v):
        return strip_required(v)


class TransactionResponse(CamelModel):
    """Transaction data for API responses."""

    id: UUID
    type: str
    amount: float
    category: str
    description: str | None
    date: Date = Field(validation_alias="txn_date", serialization_alias="date")
    created_at: datetime
    updated_at: datetime


class TransactionListResult(CamelModel):
    """Paginated list of transactions."""

    transactions: list[TransactionResponse]
    pagination: PaginationMeta


class TransactionSummary(CamelModel):
    """Income, expense and balance over a date range."""

    income: float
    expense: float
    balance: float


class CategoryTotal(CamelModel):
    """Per-category aggregate."""

    category: str
    total: float
    count: int
    type: str


class TrendPoint(CamelModel):
    """Income/expense totals for one time bucket."""

    date: str = Field(description="Bucket label: YYYY-MM-DD for day/week, YYYY-MM for month")
    income: float
    expense: float
    balance: float


class SpendingForecast(BaseModel):
    """Projected spending from recent monthly history."""

    model_config = ConfigDict(from_attributes=True)

    historical_average: float
    projected_spending: float
    confidence: int = Field(ge=0, le=100)
    months: int
