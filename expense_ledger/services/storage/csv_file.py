"""
CSV File Storage Implementation

DESIGN DECISION: The ledger lives in a single UTF-8 CSV file because:
1. Users can open their data in any spreadsheet program
2. No database setup required
3. The whole collection fits comfortably in memory

TRADEOFFS:
- Every save rewrites the whole file
- No locking; one process is assumed to own the file
- Saves go through a temporary file and an atomic rename, so a failed
  save leaves the previous file in place

Files are opened with newline="" so line breaks inside quoted fields
are read and written exactly as the codec produced them.
"""

import contextlib
import os
import tempfile
from pathlib import Path
from typing import Iterable, Optional, Union

from expense_ledger.config import get_settings
from expense_ledger.models.expense import Expense
from expense_ledger.services.storage.codec import decode, encode
from expense_ledger.services.storage.interface import (
    ExpenseStorageInterface,
    StorageError,
)


PathLike = Union[str, os.PathLike]


class CsvExpenseStorage(ExpenseStorageInterface):
    """
    CSV file implementation of expense storage.

    Expenses are stored as rows with one expense per row, below a header row.
    """

    def __init__(
        self,
        path: Optional[PathLike] = None,
        encoding: Optional[str] = None,
    ):
        """
        Args:
            path: Data file. Defaults to the configured data_file.
            encoding: Text encoding. Defaults to the configured file_encoding.
        """
        settings = get_settings()
        self._path = Path(path) if path else Path(settings.data_file)
        self._encoding = encoding or settings.file_encoding

    @property
    def path(self) -> Path:
        return self._path

    @property
    def location(self) -> str:
        return str(self._path)

    def load(self) -> list[Expense]:
        """Load all expenses. A missing file is an empty ledger."""
        try:
            with open(self._path, "r", encoding=self._encoding, newline="") as f:
                text = f.read()
        except FileNotFoundError:
            return []
        except (OSError, UnicodeError) as e:
            raise StorageError(f"Failed to read expenses from {self._path}: {e}")

        return decode(text)

    def save(self, expenses: Iterable[Expense]) -> None:
        """Overwrite the data file with `expenses`."""
        directory = self._path.parent

        try:
            text = encode(expenses)
            fd, tmp_path = tempfile.mkstemp(
                prefix=".expenses_", suffix=".tmp", dir=directory
            )
            try:
                with os.fdopen(fd, "w", encoding=self._encoding, newline="") as f:
                    f.write(text)
                os.replace(tmp_path, self._path)
            except BaseException:
                with contextlib.suppress(OSError):
                    os.unlink(tmp_path)
                raise
        except (OSError, UnicodeError) as e:
            raise StorageError(f"Failed to save expenses to {self._path}: {e}")


def save(expenses: Iterable[Expense], path: Optional[PathLike] = None) -> None:
    """Save expenses to `path` (or the configured data file)."""
    CsvExpenseStorage(path).save(expenses)


def load(path: Optional[PathLike] = None) -> list[Expense]:
    """Load expenses from `path` (or the configured data file)."""
    return CsvExpenseStorage(path).load()
