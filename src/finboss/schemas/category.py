"""Category request/response schemas."""

from typing import Literal
from uuid import UUID

from pydantic import Field, field_validator

from finboss.schemas.common import CamelModel, strip_required

CategoryType = Literal["income", "expense"]
HEX_COLOR_PATTERN = r"^#[0-9A-Fa-f]{6}$"


class CategoryCreate(CamelModel):
    """Request to create a custom category."""

    name: str = Field(..., min_length=1, max_length=100)
    type: CategoryType
    icon: str = Field(..., min_length=1, max_length=20)
    color: str = Field(..., pattern=HEX_COLOR_PATTERN, description="Hex color, e.g. #FF5733")

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v):
        return strip_required(v)


class CategoryUpdate(CamelModel):
    """Partial category update."""

    name: str | None = Field(default=None, min_length=1, max_length=100)
    type: CategoryType | None = None
    icon: str | None = Field(default=None, min_length=1, max_length=20)
    color: str | None = Field(default=None, pattern=HEX_COLOR_PATTERN)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v):
        return strip_required(v)


class CategoryResponse(CamelModel):
    """Category data for API responses."""

    id: UUID
    name: str
    type: str
    icon: str
    color: str
    is_default: bool
    user_id: UUID | None
