"""
Storage Services Package

Provides the abstract storage interface, the CSV codec, and concrete
backends. The CSV file is the durable backend; the in-memory backend
exists for tests.
"""

from expense_ledger.services.storage.interface import (
    DecodeError,
    ExpenseStorageInterface,
    StorageError,
)
from expense_ledger.services.storage.codec import (
    HEADER,
    decode,
    encode,
)
from expense_ledger.services.storage.csv_file import (
    CsvExpenseStorage,
    load,
    save,
)
from expense_ledger.services.storage.memory import InMemoryExpenseStorage

__all__ = [
    # Interfaces
    "ExpenseStorageInterface",
    # Exceptions
    "DecodeError",
    "StorageError",
    # Codec
    "HEADER",
    "decode",
    "encode",
    # Backends
    "CsvExpenseStorage",
    "InMemoryExpenseStorage",
    "load",
    "save",
]
