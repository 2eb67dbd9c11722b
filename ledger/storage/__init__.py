"""
Storage Package

Provides the abstract ledger store, the record serializer and the
flat-file implementation.
"""

from ledger.storage.interface import (
    LedgerNotReadableError,
    LedgerStorageInterface,
    MalformedRecordError,
    PersistenceError,
    StorageError,
)
from ledger.storage.serializer import (
    transaction_from_line,
    transaction_from_row,
    transaction_to_line,
)
from ledger.storage.csv_file import CsvFileStorage

__all__ = [
    # Interface
    "LedgerStorageInterface",
    # Exceptions
    "LedgerNotReadableError",
    "MalformedRecordError",
    "PersistenceError",
    "StorageError",
    # Serializer
    "transaction_from_line",
    "transaction_from_row",
    "transaction_to_line",
    # Flat-file implementation
    "CsvFileStorage",
]
