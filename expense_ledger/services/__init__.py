"""Services package."""

from expense_ledger.services.storage import (
    CsvExpenseStorage,
    DecodeError,
    ExpenseStorageInterface,
    InMemoryExpenseStorage,
    StorageError,
)

__all__ = [
    "CsvExpenseStorage",
    "DecodeError",
    "ExpenseStorageInterface",
    "InMemoryExpenseStorage",
    "StorageError",
]
