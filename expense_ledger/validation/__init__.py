"""Expense validation package."""

from expense_ledger.validation.validator import ExpenseValidator

__all__ = ["ExpenseValidator"]
