"""
Core Data Models for the Expense Ledger

These models define the schemas for every record the ledger holds.
They are designed to:
1. Keep the record identity fixed for the life of the record
2. Validate field types on construction and on assignment
3. Serialize cleanly to the durable CSV format

DESIGN DECISION: The store does NOT re-validate business rules here
(non-empty names, positive amounts). Those checks belong to the
ExpenseValidator, which callers run before handing data to the store.
"""

from datetime import date as Date
from decimal import Decimal
from enum import Enum
from typing import NamedTuple, Optional
from uuid import uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
)


def generate_expense_id() -> str:
    """Default identifier generator: a random UUID4 string."""
    return str(uuid4())


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class ExpenseCategory(str, Enum):
    """
    Supported expense categories.

    The value is the machine name written to disk. The display name is
    looked up separately and is only meant for presentation.
    """
    FOOD = "FOOD"
    TRANSPORTATION = "TRANSPORTATION"
    HOUSING = "HOUSING"
    ENTERTAINMENT = "ENTERTAINMENT"
    SHOPPING = "SHOPPING"
    HEALTHCARE = "HEALTHCARE"
    EDUCATION = "EDUCATION"
    TRAVEL = "TRAVEL"
    PERSONAL = "PERSONAL"
    OTHER = "OTHER"

    @property
    def machine_name(self) -> str:
        return self.value

    @property
    def display_name(self) -> str:
        return _CATEGORY_DISPLAY_NAMES[self]

    @classmethod
    def from_machine_name(cls, name: str) -> "ExpenseCategory":
        """
        Resolve a category by exact machine name.

        Raises:
            ValueError: If no category has that machine name
        """
        try:
            return cls(name)
        except ValueError:
            raise ValueError(f"Unknown category: {name!r}")


_CATEGORY_DISPLAY_NAMES = {
    ExpenseCategory.FOOD: "Food & Dining",
    ExpenseCategory.TRANSPORTATION: "Transportation",
    ExpenseCategory.HOUSING: "Housing & Utilities",
    ExpenseCategory.ENTERTAINMENT: "Entertainment",
    ExpenseCategory.SHOPPING: "Shopping",
    ExpenseCategory.HEALTHCARE: "Healthcare",
    ExpenseCategory.EDUCATION: "Education",
    ExpenseCategory.TRAVEL: "Travel",
    ExpenseCategory.PERSONAL: "Personal Care",
    ExpenseCategory.OTHER: "Other",
}


# =============================================================================
# MONTH KEYS
# =============================================================================

class YearMonth(NamedTuple):
    """A (year, month) bucket used by monthly and trend queries."""
    year: int
    month: int

    @classmethod
    def of(cls, day: Date) -> "YearMonth":
        return cls(day.year, day.month)

    def shift(self, months: int) -> "YearMonth":
        """Move by a number of calendar months (negative goes back)."""
        index = self.year * 12 + (self.month - 1) + months
        return YearMonth(index // 12, index % 12 + 1)

    def contains(self, day: Date) -> bool:
        return day.year == self.year and day.month == self.month

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


# =============================================================================
# CORE EXPENSE MODEL
# =============================================================================

class Expense(BaseModel):
    """
    A single ledger entry.

    CRITICAL: `id` is frozen. Every other field can change, but only the
    ExpenseStore applies changes to stored records (via `update`).
    Callers only ever see copies.
    """
    model_config = ConfigDict(validate_assignment=True)

    # Identity
    id: str = Field(
        default_factory=generate_expense_id,
        min_length=1,
        frozen=True,
        description="Opaque unique identifier"
    )

    name: str = Field(
        ...,
        description="Free-text label"
    )
    amount: Decimal = Field(
        ...,
        description="Amount spent"
    )
    date: Date = Field(
        ...,
        description="Day the expense occurred"
    )
    category: ExpenseCategory = Field(
        ...,
        description="Expense category"
    )
    description: str = Field(
        default="",
        description="Optional notes"
    )

    @property
    def year_month(self) -> YearMonth:
        return YearMonth.of(self.date)

    def __str__(self) -> str:
        return f"{self.name} - ${self.amount:.2f} ({self.category.display_name}) - {self.date}"


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_value', 'suspicious_value')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )
    suggested_fix: Optional[str] = Field(
        default=None,
        description="Suggested fix if available"
    )


class ValidationResult(BaseModel):
    """
    Result of validating user-entered expense data.

    Errors block the write. Warnings are shown but don't block.
    """

    issues: list[ValidationIssue] = Field(
        default_factory=list,
        description="All validation issues found"
    )

    @property
    def is_valid(self) -> bool:
        return not self.has_errors

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")

    @property
    def warnings(self) -> list[str]:
        return [issue.message for issue in self.issues if issue.severity == "warning"]

    @property
    def error_messages(self) -> list[str]:
        return [issue.message for issue in self.issues if issue.severity == "error"]
