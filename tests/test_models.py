"""
Tests for the Expense Ledger

Test strategy:
1. Unit tests for individual components (models, store, codec, validator)
2. Integration tests for the ledger session (with in-memory or tmp_path storage)
3. No network access in tests
"""

import pytest
from datetime import date
from decimal import Decimal
from uuid import uuid4

from pydantic import ValidationError

from expense_ledger.models.expense import (
    Expense,
    ExpenseCategory,
    ValidationIssue,
    ValidationResult,
    YearMonth,
    generate_expense_id,
)
from expense_ledger.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)


def make_expense(**overrides) -> Expense:
    data = {
        "name": "Groceries",
        "amount": Decimal("42.10"),
        "date": date(2024, 3, 5),
        "category": ExpenseCategory.FOOD,
    }
    data.update(overrides)
    return Expense(**data)


class TestExpenseModel:
    """Tests for the Expense model."""

    def test_expense_creation(self):
        """Test Expense model creation."""
        expense = make_expense(description="weekly shop")
        assert expense.name == "Groceries"
        assert expense.amount == Decimal("42.10")
        assert expense.date == date(2024, 3, 5)
        assert expense.category == ExpenseCategory.FOOD
        assert expense.description == "weekly shop"

    def test_description_defaults_to_empty(self):
        assert make_expense().description == ""

    def test_expense_gets_generated_id(self):
        """Each new expense gets its own non-empty id."""
        first = make_expense()
        second = make_expense()
        assert first.id
        assert second.id
        assert first.id != second.id

    def test_id_is_immutable(self):
        """Assigning to id is rejected."""
        expense = make_expense(id="fixed-id")
        with pytest.raises(ValidationError):
            expense.id = "other-id"
        assert expense.id == "fixed-id"

    def test_other_fields_are_mutable(self):
        expense = make_expense()
        expense.name = "Dinner"
        expense.amount = Decimal("9.99")
        expense.category = ExpenseCategory.ENTERTAINMENT
        assert expense.name == "Dinner"
        assert expense.amount == Decimal("9.99")
        assert expense.category == ExpenseCategory.ENTERTAINMENT

    def test_assignment_is_validated(self):
        """Bad values are rejected on assignment."""
        expense = make_expense()
        with pytest.raises(ValidationError):
            expense.amount = "not a number"

    def test_empty_id_rejected(self):
        with pytest.raises(ValidationError):
            make_expense(id="")

    def test_amount_from_float(self):
        """Floats are accepted and stored as Decimal."""
        expense = make_expense(amount=12.5)
        assert isinstance(expense.amount, Decimal)
        assert expense.amount == Decimal("12.5")

    def test_non_positive_amount_is_stored(self):
        """The model does not enforce positive amounts."""
        assert make_expense(amount=Decimal("-5")).amount == Decimal("-5")
        assert make_expense(amount=0).amount == Decimal("0")

    def test_year_month(self):
        assert make_expense(date=date(2023, 12, 31)).year_month == YearMonth(2023, 12)

    def test_str(self):
        expense = make_expense(amount=Decimal("12.5"))
        assert str(expense) == "Groceries - $12.50 (Food & Dining) - 2024-03-05"

    def test_generate_expense_id_is_unique(self):
        ids = {generate_expense_id() for _ in range(100)}
        assert len(ids) == 100


class TestExpenseCategories:
    """Tests for the expense category enum."""

    def test_ten_categories(self):
        assert len(list(ExpenseCategory)) == 10

    def test_machine_and_display_names(self):
        """Test that every category carries both names."""
        expected = {
            "FOOD": "Food & Dining",
            "TRANSPORTATION": "Transportation",
            "HOUSING": "Housing & Utilities",
            "ENTERTAINMENT": "Entertainment",
            "SHOPPING": "Shopping",
            "HEALTHCARE": "Healthcare",
            "EDUCATION": "Education",
            "TRAVEL": "Travel",
            "PERSONAL": "Personal Care",
            "OTHER": "Other",
        }
        for machine, display in expected.items():
            category = ExpenseCategory.from_machine_name(machine)
            assert category.machine_name == machine
            assert category.display_name == display

    def test_from_machine_name_is_exact(self):
        """Lowercase or display names do not resolve."""
        for name in ["food", "Food & Dining", " FOOD", ""]:
            with pytest.raises(ValueError, match="Unknown category"):
                ExpenseCategory.from_machine_name(name)


class TestYearMonth:
    """Tests for the YearMonth key."""

    def test_of(self):
        assert YearMonth.of(date(2024, 2, 29)) == YearMonth(2024, 2)

    def test_shift_within_year(self):
        assert YearMonth(2024, 3).shift(-2) == YearMonth(2024, 1)

    def test_shift_across_years(self):
        assert YearMonth(2024, 1).shift(-1) == YearMonth(2023, 12)
        assert YearMonth(2023, 12).shift(1) == YearMonth(2024, 1)
        assert YearMonth(2024, 2).shift(-26) == YearMonth(2021, 12)

    def test_contains(self):
        key = YearMonth(2024, 3)
        assert key.contains(date(2024, 3, 1))
        assert not key.contains(date(2023, 3, 1))
        assert not key.contains(date(2024, 4, 1))

    def test_str(self):
        assert str(YearMonth(2024, 3)) == "2024-03"


class TestValidationResult:
    """Tests for ValidationResult model."""

    def test_validation_result_has_errors(self):
        """Test has_errors property."""
        result = ValidationResult(
            issues=[
                ValidationIssue(
                    field="amount",
                    issue_type="missing",
                    message="Please enter a valid amount",
                    severity="error",
                ),
            ],
        )
        assert result.has_errors is True
        assert result.is_valid is False
        assert result.error_count == 1
        assert result.error_messages == ["Please enter a valid amount"]

    def test_validation_result_warnings_only(self):
        """Test that warnings don't count as errors."""
        result = ValidationResult(
            issues=[
                ValidationIssue(
                    field="date",
                    issue_type="future_date",
                    message="Date in future",
                    severity="warning",
                ),
            ],
        )
        assert result.has_errors is False
        assert result.is_valid is True
        assert result.warnings == ["Date in future"]

    def test_severity_must_be_known(self):
        with pytest.raises(ValidationError):
            ValidationIssue(
                field="name",
                issue_type="missing",
                message="x",
                severity="fatal",
            )


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        """Test AuditEvent model creation."""
        event = AuditEvent(
            event_type=AuditEventType.EXPENSE_ADDED,
            description="Expense added",
        )
        assert event.event_type == AuditEventType.EXPENSE_ADDED
        assert event.severity == AuditSeverity.INFO

    def test_audit_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        correlation_id = uuid4()
        event = AuditEventBuilder.ledger_saved(
            path="expenses.csv",
            expense_count=3,
            correlation_id=correlation_id,
        )
        log_dict = event.to_log_dict()
        assert "event_id" in log_dict
        assert log_dict["event_type"] == "ledger_saved"
        assert log_dict["entity_id"] == "expenses.csv"
        assert log_dict["correlation_id"] == str(correlation_id)
        assert log_dict["details"]["expense_count"] == 3

    def test_audit_event_builder_expense_added(self):
        event = AuditEventBuilder.expense_added(
            expense_id="exp-1",
            name="Lunch",
            amount="12.50",
        )
        assert event.event_type == AuditEventType.EXPENSE_ADDED
        assert event.entity_type == "expense"
        assert event.entity_id == "exp-1"
        assert event.details == {"amount": "12.50"}

    def test_audit_event_builder_long_name_is_truncated(self):
        """Descriptions stay within the model's length limit."""
        event = AuditEventBuilder.expense_added("exp-1", "x" * 1000, "1.00")
        assert len(event.description) <= 500

    def test_audit_event_builder_load_failed(self):
        event = AuditEventBuilder.load_failed("expenses.csv", "Line 2: Unknown category")
        assert event.severity == AuditSeverity.ERROR
        assert event.error_message == "Line 2: Unknown category"

    def test_audit_event_builder_not_found_is_warning(self):
        event = AuditEventBuilder.expense_not_found("missing", "remove")
        assert event.severity == AuditSeverity.WARNING
        assert event.details == {"operation": "remove"}


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
