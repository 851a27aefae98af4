"""Category model: system defaults plus user-owned custom categories."""
from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, Index, String, UniqueConstraint, text
from sqlalchemy.orm import Mapped, mapped_column

from finboss.models.base import BaseModel


class Category(BaseModel):
    """Category model. ``user_id`` is NULL for default categories."""

    __tablename__ = "categories"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    type: Mapped[str] = mapped_column(String(10), nullable=False)
    icon: Mapped[str] = mapped_column(String(20), nullable=False)
    color: Mapped[str] = mapped_column(String(7), nullable=False)
    is_default: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    user_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=True, index=True
    )

    __table_args__ = (
        UniqueConstraint("name", "user_id", name="uq_category_name_owner"),
        # NULL owners never collide under the constraint above, so defaults get their own index.
        Index(
            "uq_category_default_name",
            "name",
            unique=True,
            postgresql_where=text("is_default"),
            sqlite_where=text("is_default = 1"),
        ),
    )

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, name={self.name}, is_default={self.is_default})>"
