"""
Expense Input Validation

DESIGN DECISION: The store accepts whatever it is given. Input rules
live here, and the ledger session runs them before writing.

Two kinds of findings:
- ERRORS block the write (empty name, missing or non-positive amount)
- WARNINGS are reported but don't block (suspiciously large amounts,
  dates far in the future)

IMPORTANT: Validation NEVER silently fixes issues.
It reports them so the user can correct the input.
"""

from datetime import date, timedelta
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from expense_ledger.config import LedgerSettings, get_settings
from expense_ledger.models.expense import (
    Expense,
    ValidationIssue,
    ValidationResult,
)


AmountInput = Union[Decimal, float, int, str, None]


class ExpenseValidator:
    """Validates user-entered expense fields."""

    def __init__(self, settings: Optional[LedgerSettings] = None):
        self._settings = settings if settings is not None else get_settings()

    def validate(
        self,
        name: Optional[str],
        amount: AmountInput,
        expense_date: Optional[date],
        today: Optional[date] = None,
    ) -> ValidationResult:
        """
        Validate the fields of a new or edited expense.

        Args:
            name: Expense label as entered
            amount: Amount as entered (text is parsed)
            expense_date: Date of the expense
            today: Reference date for the future-date check

        Returns:
            ValidationResult with all issues found
        """
        issues = []
        issues.extend(self._check_name(name))
        issues.extend(self._check_amount(amount))
        issues.extend(self._check_date(expense_date, today or date.today()))
        return ValidationResult(issues=issues)

    def validate_expense(
        self,
        expense: Expense,
        today: Optional[date] = None,
    ) -> ValidationResult:
        return self.validate(expense.name, expense.amount, expense.date, today)

    def _check_name(self, name: Optional[str]) -> list[ValidationIssue]:
        if name is None or not name.strip():
            return [ValidationIssue(
                field="name",
                issue_type="missing",
                message="Please enter a name",
                severity="error",
            )]
        return []

    def _check_amount(self, amount: AmountInput) -> list[ValidationIssue]:
        if amount is None or (isinstance(amount, str) and not amount.strip()):
            return [ValidationIssue(
                field="amount",
                issue_type="missing",
                message="Please enter a valid amount",
                severity="error",
            )]

        try:
            value = Decimal(amount.strip() if isinstance(amount, str) else str(amount))
        except InvalidOperation:
            value = None
        if value is None or not value.is_finite():
            return [ValidationIssue(
                field="amount",
                issue_type="invalid_format",
                message="Please enter a valid amount",
                severity="error",
                suggested_fix="Use digits with an optional decimal point, e.g. 12.50",
            )]

        if value <= 0:
            return [ValidationIssue(
                field="amount",
                issue_type="invalid_value",
                message="Amount must be greater than zero",
                severity="error",
            )]

        if value > self._settings.max_expense_amount:
            return [ValidationIssue(
                field="amount",
                issue_type="suspicious_value",
                message=f"Amount ({value:.2f}) is unusually large",
                severity="warning",
                suggested_fix="Please verify the amount is correct",
            )]

        return []

    def _check_date(
        self,
        expense_date: Optional[date],
        today: date,
    ) -> list[ValidationIssue]:
        if expense_date is None:
            return [ValidationIssue(
                field="date",
                issue_type="missing",
                message="Please enter a date",
                severity="error",
            )]

        max_future_date = today + timedelta(
            days=self._settings.future_date_tolerance_days
        )
        if expense_date > max_future_date:
            return [ValidationIssue(
                field="date",
                issue_type="future_date",
                message=f"Expense date ({expense_date}) is in the future",
                severity="warning",
                suggested_fix="Please verify the date is correct",
            )]

        return []
