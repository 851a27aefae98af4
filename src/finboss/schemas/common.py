"""Shared response envelope and base schema config."""

from decimal import Decimal
from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")

# Largest value a Numeric(12, 2) column holds.
MAX_AMOUNT = 9_999_999_999.99


def check_cents(value: float | None) -> float | None:
    """Reject money values with more than two decimal places."""
    if value is None:
        return value
    if Decimal(str(value)).as_tuple().exponent < -2:
        raise ValueError("must have at most 2 decimal places")
    return value


def strip_required(value: str | None) -> str | None:
    """Strip surrounding whitespace; a blank string is rejected."""
    if value is None:
        return value
    value = value.strip()
    if not value:
        raise ValueError("cannot be blank")
    return value


class CamelModel(BaseModel):
    """Base model exposing camelCase JSON while accepting snake_case too."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class SuccessResponse(BaseModel, Generic[T]):
    """Standard success envelope: ``{"status": "success", "data": ...}``."""

    status: Literal["success"] = "success"
    message: str | None = Field(default=None, description="Optional human-readable note")
    data: T


class MessageResponse(BaseModel):
    """Success envelope without a payload."""

    status: Literal["success"] = "success"
    message: str


class ErrorResponse(BaseModel):
    """Standard error envelope."""

    status: Literal["error"] = "error"
    message: str


class PaginationMeta(CamelModel):
    """Pagination details for list endpoints."""

    total: int
    page: int
    limit: int
    pages: int
