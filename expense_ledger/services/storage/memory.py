"""In-memory storage backend, used in tests and for throwaway ledgers."""

from typing import Iterable, Optional

from expense_ledger.models.expense import Expense
from expense_ledger.services.storage.interface import ExpenseStorageInterface


class InMemoryExpenseStorage(ExpenseStorageInterface):

    def __init__(self, expenses: Optional[Iterable[Expense]] = None):
        self._expenses = [expense.model_copy() for expense in expenses or []]
        self.save_count = 0

    @property
    def location(self) -> str:
        return "memory"

    def load(self) -> list[Expense]:
        return [expense.model_copy() for expense in self._expenses]

    def save(self, expenses: Iterable[Expense]) -> None:
        self._expenses = [expense.model_copy() for expense in expenses]
        self.save_count += 1
