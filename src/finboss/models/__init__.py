"""Database models."""
from finboss.models.base import Base
from finboss.models.user import RefreshToken, User
from finboss.models.transaction import Transaction
from finboss.models.budget import Budget
from finboss.models.category import Category

__all__ = ["Base", "User", "RefreshToken", "Transaction", "Budget", "Category"]
