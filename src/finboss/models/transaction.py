"""Transaction model representing a single income or expense record."""
from datetime import date
from uuid import UUID

from sqlalchemy import CheckConstraint, Date, ForeignKey, Index, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from finboss.models.base import BaseModel

TRANSACTION_TYPES = ("income", "expense")


class Transaction(BaseModel):
    """Transaction model owned by a single user."""

    __tablename__ = "transactions"

    user_id: Mapped[UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    type: Mapped[str] = mapped_column(String(10), nullable=False)
    amount: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    txn_date: Mapped[date] = mapped_column(Date, nullable=False, default=date.today)

    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_transactions_amount_positive"),
        CheckConstraint(f"type IN {TRANSACTION_TYPES}", name="ck_transactions_type"),
        Index("ix_transactions_user_id_txn_date", "user_id", "txn_date"),
        Index("ix_transactions_user_id_category", "user_id", "category"),
    )

    def __repr__(self) -> str:
        return f"<Transaction(id={self.id}, type={self.type}, amount={self.amount})>"
