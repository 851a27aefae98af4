"""Budget model: a spending limit for one category over a period."""
from uuid import UUID

from sqlalchemy import CheckConstraint, ForeignKey, Numeric, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from finboss.models.base import BaseModel

BUDGET_PERIODS = ("monthly", "yearly")


class Budget(BaseModel):
    """Budget model owned by a single user."""

    __tablename__ = "budgets"

    user_id: Mapped[UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    limit: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=False)
    period: Mapped[str] = mapped_column(String(10), nullable=False, default="monthly")

    __table_args__ = (
        UniqueConstraint("user_id", "category", "period", name="uq_budget_user_category_period"),
        CheckConstraint('"limit" > 0', name="ck_budgets_limit_positive"),
        CheckConstraint(f"period IN {BUDGET_PERIODS}", name="ck_budgets_period"),
    )

    def __repr__(self) -> str:
        return f"<Budget(id={self.id}, category={self.category}, period={self.period})>"
