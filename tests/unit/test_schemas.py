"""Unit tests for request schema validation."""

import pytest
from pydantic import ValidationError

from finboss.schemas.budget import BudgetCreate, BudgetUpdate
from finboss.schemas.category import CategoryCreate
from finboss.schemas.common import MAX_AMOUNT, check_cents, strip_required
from finboss.schemas.transaction import TransactionCreate, TransactionUpdate


class TestCheckCents:
    @pytest.mark.parametrize("value", [1, 1.5, 10.01, 0.01, MAX_AMOUNT])
    def test_accepts_two_decimal_places(self, value):
        assert check_cents(value) == value

    @pytest.mark.parametrize("value", [10.005, 0.001, 1e-5])
    def test_rejects_fractions_of_a_cent(self, value):
        with pytest.raises(ValueError):
            check_cents(value)

    def test_none_passes_through(self):
        assert check_cents(None) is None


class TestStripRequired:
    def test_strips(self):
        assert strip_required("  food  ") == "food"

    @pytest.mark.parametrize("value", ["", "   ", "\t\n"])
    def test_rejects_blank(self, value):
        with pytest.raises(ValueError):
            strip_required(value)


class TestMoneyFields:
    """Amounts and limits must fit a Numeric(12, 2) column."""

    def test_transaction_amount(self):
        assert TransactionCreate(type="expense", amount=10.01, category="food").amount == 10.01

        with pytest.raises(ValidationError):
            TransactionCreate(type="expense", amount=10.005, category="food")
        with pytest.raises(ValidationError):
            TransactionCreate(type="expense", amount=MAX_AMOUNT + 1, category="food")
        with pytest.raises(ValidationError):
            TransactionUpdate(amount=0.001)

    def test_budget_limit(self):
        assert BudgetCreate(category="food", limit=MAX_AMOUNT).limit == MAX_AMOUNT

        with pytest.raises(ValidationError):
            BudgetCreate(category="food", limit=1e13)
        with pytest.raises(ValidationError):
            BudgetUpdate(limit=2.345)

    def test_partial_update_without_amount(self):
        assert TransactionUpdate(description="x").amount is None
        assert BudgetUpdate(period="yearly").limit is None


class TestNames:
    def test_stripped_before_use(self):
        assert TransactionCreate(type="income", amount=1, category=" salary ").category == "salary"
        assert BudgetCreate(category=" rent ", limit=1).category == "rent"

    def test_blank_rejected(self):
        with pytest.raises(ValidationError):
            TransactionCreate(type="expense", amount=1, category="   ")
        with pytest.raises(ValidationError):
            BudgetCreate(category="  ", limit=1)
        with pytest.raises(ValidationError):
            CategoryCreate(name="   ", type="expense", icon="x", color="#000000")
