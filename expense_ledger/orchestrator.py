"""
Ledger Session for the Expense Ledger

This module ties the components together and defines the session flow:
1. Startup: storage → load → store
2. Editing: validate → store mutation → audit
3. Queries: answered by the store
4. Save: store snapshot → storage (only on explicit request)

DESIGN DECISION: Nothing is saved automatically. A presentation layer
calls `save()` when the user asks for it.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

from expense_ledger.audit import AuditLogger, configure_logging, create_correlation_id
from expense_ledger.config import LedgerSettings, get_settings
from expense_ledger.models.expense import (
    Expense,
    ExpenseCategory,
    ValidationResult,
    YearMonth,
)
from expense_ledger.services.storage import (
    CsvExpenseStorage,
    ExpenseStorageInterface,
    StorageError,
)
from expense_ledger.services.storage.csv_file import PathLike
from expense_ledger.store import DuplicateExpenseError, ExpenseStore
from expense_ledger.validation import ExpenseValidator


class ExpenseValidationError(ValueError):
    """User input failed validation; nothing was written."""

    def __init__(self, result: ValidationResult):
        super().__init__("; ".join(result.error_messages))
        self.result = result


class ExpenseLedger:
    """
    One editing session over a stored ledger.

    Holds the ExpenseStore for the session and writes it back to
    storage when asked.
    """

    def __init__(
        self,
        storage: ExpenseStorageInterface,
        store: Optional[ExpenseStore] = None,
        validator: Optional[ExpenseValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
        settings: Optional[LedgerSettings] = None,
    ):
        self._settings = settings if settings is not None else get_settings()
        self._storage = storage
        self._store = store if store is not None else ExpenseStore()
        self._validator = (
            validator if validator is not None else ExpenseValidator(self._settings)
        )
        self._audit_logger = (
            audit_logger if audit_logger is not None
            else AuditLogger(create_correlation_id())
        )

    @classmethod
    def open(
        cls,
        path: Optional[PathLike] = None,
        settings: Optional[LedgerSettings] = None,
    ) -> "ExpenseLedger":
        """
        Open the CSV ledger at `path` (or the configured data file).

        Raises:
            StorageError: If the file exists but cannot be loaded
        """
        settings = settings if settings is not None else get_settings()
        configure_logging(settings.log_level)
        storage = CsvExpenseStorage(path or settings.data_file, settings.file_encoding)
        ledger = cls(storage, settings=settings)
        ledger.load()
        return ledger

    @property
    def store(self) -> ExpenseStore:
        return self._store

    @property
    def storage(self) -> ExpenseStorageInterface:
        return self._storage

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def load(self) -> int:
        """
        Replace the session's expenses with the stored ones.

        On failure the current expenses are kept and the error is re-raised.

        Returns:
            Number of expenses loaded
        """
        try:
            expenses = self._storage.load()
            self._store.replace_all(expenses)
        except DuplicateExpenseError as e:
            self._audit_logger.log_load_failed(self._storage.location, str(e))
            raise StorageError(f"Failed to load expenses: {e}")
        except StorageError as e:
            self._audit_logger.log_load_failed(self._storage.location, str(e))
            raise

        self._audit_logger.log_ledger_loaded(self._storage.location, len(expenses))
        return len(expenses)

    def save(self) -> int:
        """
        Write every expense in the session to storage.

        Returns:
            Number of expenses saved
        """
        expenses = self._store.list_all()
        try:
            self._storage.save(expenses)
        except StorageError as e:
            self._audit_logger.log_save_failed(self._storage.location, str(e))
            raise

        self._audit_logger.log_ledger_saved(self._storage.location, len(expenses))
        return len(expenses)

    # -------------------------------------------------------------------------
    # Editing
    # -------------------------------------------------------------------------

    def _check(self, result: ValidationResult, expense_id: Optional[str] = None) -> None:
        if result.is_valid:
            return
        self._audit_logger.log_validation_failed(
            [issue.model_dump() for issue in result.issues],
            expense_id,
        )
        raise ExpenseValidationError(result)

    def record_expense(
        self,
        name: str,
        amount: Decimal,
        expense_date: date,
        category: ExpenseCategory,
        description: str = "",
    ) -> Expense:
        """
        Validate and add a new expense.

        Returns:
            The stored expense with its generated id

        Raises:
            ExpenseValidationError: If the input has errors
        """
        self._check(self._validator.validate(name, amount, expense_date))

        expense = self._store.add(Expense(
            name=name,
            amount=amount,
            date=expense_date,
            category=category,
            description=description or "",
        ))
        self._audit_logger.log_expense_added(
            expense.id, expense.name, f"{expense.amount:.2f}"
        )
        return expense

    def edit_expense(self, expense: Expense) -> bool:
        """
        Validate and apply a full replacement of an existing expense.

        Returns:
            True if the expense existed and was updated

        Raises:
            ExpenseValidationError: If the new values have errors
        """
        self._check(self._validator.validate_expense(expense), expense.id)

        if not self._store.update(expense):
            self._audit_logger.log_expense_not_found(expense.id, "update")
            return False
        self._audit_logger.log_expense_updated(expense.id)
        return True

    def delete_expense(self, expense_id: str) -> bool:
        if not self._store.remove(expense_id):
            self._audit_logger.log_expense_not_found(expense_id, "remove")
            return False
        self._audit_logger.log_expense_removed(expense_id)
        return True

    # -------------------------------------------------------------------------
    # Reports
    # -------------------------------------------------------------------------

    def monthly_trend(self, months: Optional[int] = None) -> dict[YearMonth, Decimal]:
        """Trailing monthly totals, defaulting to the configured window."""
        if months is None:
            months = self._settings.trend_months
        return self._store.trailing_monthly_totals(months)
