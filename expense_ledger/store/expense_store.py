"""
In-Memory Expense Store

DESIGN DECISION: The store is the single owner of the live expense records.
- Records go in as copies and come out as copies
- A record's id is fixed; everything else changes only through `update`
- "Not found" is a normal outcome, reported as False / None / empty

Aggregations are computed on demand from the current records.
Collections in a personal ledger are small enough that a linear scan
per query is the simplest correct approach.
"""

from datetime import date
from decimal import Decimal
from typing import Callable, Iterable, Optional

from expense_ledger.models.expense import (
    Expense,
    ExpenseCategory,
    YearMonth,
    generate_expense_id,
)


IdGenerator = Callable[[], str]
Clock = Callable[[], date]

ZERO = Decimal("0")


class DuplicateExpenseError(ValueError):
    """The same expense id appears more than once in a collection."""

    def __init__(self, expense_id: str):
        super().__init__(f"Duplicate expense id: {expense_id}")
        self.expense_id = expense_id


def _sum_amounts(expenses: Iterable[Expense]) -> Decimal:
    return sum((expense.amount for expense in expenses), ZERO)


class ExpenseStore:
    """
    Authoritative collection of expenses plus aggregate queries.

    Not thread-safe. Callers must serialize access.
    """

    def __init__(
        self,
        expenses: Optional[Iterable[Expense]] = None,
        id_generator: Optional[IdGenerator] = None,
        today: Optional[Clock] = None,
    ):
        """
        Initialize the store.

        Args:
            expenses: Initial records (e.g. from a load). Ids are kept as-is.
            id_generator: Produces ids for new records. Defaults to UUID4 strings.
            today: Returns the current date for trailing-month queries.

        Raises:
            DuplicateExpenseError: If the initial records share an id
        """
        self._id_generator = id_generator or generate_expense_id
        self._today = today or date.today
        self._expenses: list[Expense] = []
        if expenses is not None:
            self.replace_all(expenses)

    def __len__(self) -> int:
        return len(self._expenses)

    def __contains__(self, expense_id: object) -> bool:
        return self._index_of(expense_id) is not None

    def _index_of(self, expense_id: object) -> Optional[int]:
        for idx, expense in enumerate(self._expenses):
            if expense.id == expense_id:
                return idx
        return None

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def add(self, expense: Expense) -> Expense:
        """
        Store a new expense under a freshly generated id.

        Any id already on `expense` is ignored.

        Returns:
            A copy of the stored record, carrying its new id
        """
        data = expense.model_dump(exclude={"id"})
        record = Expense(id=self._id_generator(), **data)
        self._expenses.append(record)
        return record.model_copy()

    def remove(self, expense_id: str) -> bool:
        """
        Remove the expense with this id.

        Returns:
            True if a record was removed, False if no record matched
        """
        idx = self._index_of(expense_id)
        if idx is None:
            return False
        del self._expenses[idx]
        return True

    def update(self, expense: Expense) -> bool:
        """
        Replace the stored record that has `expense.id` with `expense`.

        This is a full replacement, not a patch. The record keeps its
        position in insertion order.

        Returns:
            True if a record was replaced, False if the id is unknown
        """
        idx = self._index_of(expense.id)
        if idx is None:
            return False
        self._expenses[idx] = expense.model_copy()
        return True

    def replace_all(self, expenses: Iterable[Expense]) -> None:
        """
        Swap in a whole new collection, keeping the given ids.

        Raises:
            DuplicateExpenseError: If two records share an id. The current
                collection is left untouched in that case.
        """
        records = []
        seen = set()
        for expense in expenses:
            if expense.id in seen:
                raise DuplicateExpenseError(expense.id)
            seen.add(expense.id)
            records.append(expense.model_copy())
        self._expenses = records

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def get(self, expense_id: str) -> Optional[Expense]:
        """Return a copy of the expense with this id, or None."""
        idx = self._index_of(expense_id)
        if idx is None:
            return None
        return self._expenses[idx].model_copy()

    def list_all(self) -> list[Expense]:
        """Snapshot of every record, in insertion order."""
        return [expense.model_copy() for expense in self._expenses]

    def by_month(self, year: int, month: int) -> list[Expense]:
        key = YearMonth(year, month)
        return [
            expense.model_copy()
            for expense in self._expenses
            if key.contains(expense.date)
        ]

    def by_category(self, category: ExpenseCategory) -> list[Expense]:
        return [
            expense.model_copy()
            for expense in self._expenses
            if expense.category == category
        ]

    # -------------------------------------------------------------------------
    # Aggregations
    # -------------------------------------------------------------------------

    def total(self) -> Decimal:
        """Sum of all amounts. Zero for an empty store."""
        return _sum_amounts(self._expenses)

    def monthly_total(self, year: int, month: int) -> Decimal:
        return _sum_amounts(self.by_month(year, month))

    def trailing_monthly_totals(self, months: int) -> dict[YearMonth, Decimal]:
        """
        Totals for the current month and the `months - 1` months before it.

        Every month in the window is present, zero if it has no expenses.
        Keys are ordered oldest first. Returns an empty dict if `months <= 0`.
        """
        if months <= 0:
            return {}

        current = YearMonth.of(self._today())
        totals = {
            current.shift(offset): ZERO
            for offset in range(-(months - 1), 1)
        }
        for expense in self._expenses:
            key = expense.year_month
            if key in totals:
                totals[key] += expense.amount
        return totals

    def category_totals(self, year: int, month: int) -> dict[ExpenseCategory, Decimal]:
        """
        Per-category totals for one month.

        Every category is present, zero if it has no expenses that month.
        """
        totals = {category: ZERO for category in ExpenseCategory}
        for expense in self.by_month(year, month):
            totals[expense.category] += expense.amount
        return totals
