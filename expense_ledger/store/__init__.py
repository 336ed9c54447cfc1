"""In-memory expense store package."""

from expense_ledger.store.expense_store import (
    Clock,
    DuplicateExpenseError,
    ExpenseStore,
    IdGenerator,
)

__all__ = ["Clock", "DuplicateExpenseError", "ExpenseStore", "IdGenerator"]
