"""Tests for ExpenseValidator."""

from datetime import date
from decimal import Decimal

import pytest

from expense_ledger.config import LedgerSettings
from expense_ledger.models.expense import Expense, ExpenseCategory
from expense_ledger.validation import ExpenseValidator


TODAY = date(2024, 3, 15)


@pytest.fixture
def validator() -> ExpenseValidator:
    return ExpenseValidator(LedgerSettings(
        max_expense_amount=Decimal("5000"),
        future_date_tolerance_days=7,
    ))


class TestExpenseValidator:
    """Tests for the input rules."""

    def test_valid_input(self, validator):
        result = validator.validate("Lunch", Decimal("12.50"), date(2024, 3, 1), TODAY)
        assert result.is_valid
        assert result.issues == []

    @pytest.mark.parametrize("name", ["", "   ", None])
    def test_name_required(self, validator, name):
        result = validator.validate(name, Decimal("1"), TODAY, TODAY)
        assert not result.is_valid
        assert result.error_messages == ["Please enter a name"]

    @pytest.mark.parametrize("amount", ["0", 0, Decimal("-1"), "-0.01"])
    def test_amount_must_be_positive(self, validator, amount):
        result = validator.validate("Lunch", amount, TODAY, TODAY)
        assert result.error_messages == ["Amount must be greater than zero"]

    @pytest.mark.parametrize("amount", ["abc", "", "  ", None, "NaN", "1,50"])
    def test_amount_must_be_a_number(self, validator, amount):
        result = validator.validate("Lunch", amount, TODAY, TODAY)
        assert result.error_messages == ["Please enter a valid amount"]

    def test_amount_from_text(self, validator):
        assert validator.validate("Lunch", " 12.50 ", TODAY, TODAY).is_valid

    def test_amount_from_float(self, validator):
        assert validator.validate("Lunch", 12.5, TODAY, TODAY).is_valid

    def test_large_amount_is_a_warning(self, validator):
        result = validator.validate("Car", Decimal("7500"), TODAY, TODAY)
        assert result.is_valid
        assert len(result.warnings) == 1
        assert "unusually large" in result.warnings[0]

    def test_date_required(self, validator):
        result = validator.validate("Lunch", Decimal("1"), None, TODAY)
        assert result.error_messages == ["Please enter a date"]

    def test_near_future_date_is_fine(self, validator):
        result = validator.validate("Lunch", Decimal("1"), date(2024, 3, 22), TODAY)
        assert result.issues == []

    def test_far_future_date_is_a_warning(self, validator):
        result = validator.validate("Lunch", Decimal("1"), date(2024, 3, 23), TODAY)
        assert result.is_valid
        assert [issue.issue_type for issue in result.issues] == ["future_date"]

    def test_all_errors_reported_together(self, validator):
        result = validator.validate("", "abc", None, TODAY)
        assert result.error_count == 3
        assert {issue.field for issue in result.issues} == {"name", "amount", "date"}

    def test_validate_expense(self, validator):
        expense = Expense(
            name="Refund",
            amount=Decimal("-3"),
            date=date(2024, 3, 1),
            category=ExpenseCategory.SHOPPING,
        )
        result = validator.validate_expense(expense, TODAY)
        assert result.error_messages == ["Amount must be greater than zero"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
