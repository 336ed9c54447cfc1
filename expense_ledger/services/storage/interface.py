"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for persistence.
This allows us to:
1. Keep the CSV file format out of the ledger session logic
2. Use in-memory storage for testing
3. Swap the backing file for another store later

The interface is intentionally small. Persistence is a whole-collection
operation: load everything at startup, save everything on request.
"""

from abc import ABC, abstractmethod
from typing import Iterable, Optional

from expense_ledger.models.expense import Expense


class ExpenseStorageInterface(ABC):
    """
    Abstract interface for expense persistence.

    Any storage implementation (CSV file, in-memory, etc.)
    must implement these methods.
    """

    @property
    @abstractmethod
    def location(self) -> str:
        """Human-readable description of where the data lives."""
        pass

    @abstractmethod
    def load(self) -> list[Expense]:
        """
        Load the full collection.

        Returns:
            All stored expenses, in stored order. Empty if nothing
            has been saved yet.

        Raises:
            DecodeError: If stored data is malformed
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def save(self, expenses: Iterable[Expense]) -> None:
        """
        Overwrite the stored collection with `expenses`.

        Raises:
            StorageError: If the backend cannot be written
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class DecodeError(StorageError):
    """Stored data could not be parsed into expenses."""

    def __init__(self, message: str, line_number: Optional[int] = None):
        if line_number is not None:
            message = f"Line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number
