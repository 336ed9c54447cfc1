"""
Data Models Package

This package contains all Pydantic models used by the Expense Ledger.
Every record flowing through the store and the codec conforms to these schemas.
"""

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

__all__ = [
    # Expense models
    "Expense",
    "ExpenseCategory",
    "ValidationIssue",
    "ValidationResult",
    "YearMonth",
    "generate_expense_id",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
