"""
Abstract Storage Interface

DESIGN DECISION: The Account never touches files directly. It talks to
a store with two operations:
1. load() - read the whole ledger
2. save() - replace the whole ledger

This keeps the durability policy (when to save) in the Account and the
mechanics (how to save) in the store, and lets tests run against an
in-memory store.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from ledger.models.transaction import LoadResult, Transaction


class LedgerStorageInterface(ABC):
    """
    Abstract interface for ledger persistence.

    Any storage implementation (flat file, database, etc.)
    must implement these methods.
    """

    @property
    @abstractmethod
    def location(self) -> str:
        """Human-readable description of where the ledger lives."""
        pass

    @abstractmethod
    def load(self) -> tuple[list[Transaction], LoadResult]:
        """
        Read every stored transaction in stored order.

        A missing ledger is an empty ledger, not an error.

        Returns:
            (transactions, load_result)

        Raises:
            LedgerNotReadableError: If the ledger exists but cannot be read
            MalformedRecordError: If a record is bad and the policy is fail-fast
        """
        pass

    @abstractmethod
    def save(self, transactions: Sequence[Transaction]) -> None:
        """
        Replace the stored ledger with the given transactions, in order.

        Raises:
            PersistenceError: If the write fails
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class LedgerNotReadableError(StorageError):
    """The ledger exists but could not be read."""
    pass


class PersistenceError(StorageError):
    """The ledger could not be written."""
    pass


class MalformedRecordError(StorageError):
    """A stored record could not be turned back into a transaction."""

    def __init__(
        self,
        reason: str,
        line: str = "",
        line_number: Optional[int] = None,
    ):
        self.reason = reason
        self.line = line
        self.line_number = line_number
        if line_number is not None:
            message = f"Malformed ledger line {line_number}: {reason}"
        else:
            message = f"Malformed ledger record: {reason}"
        super().__init__(message)
