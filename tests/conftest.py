"""
Shared fixtures for the ledger tests.

No test touches the real working directory: file-backed tests use
tmp_path, everything else uses the in-memory store below.
"""

from decimal import Decimal
from typing import Sequence

import pytest

from ledger.config import DurabilityPolicy, LedgerSettings, MalformedLinePolicy
from ledger.models.transaction import LoadResult, Transaction
from ledger.storage import LedgerStorageInterface, PersistenceError


class InMemoryStorage(LedgerStorageInterface):
    """Ledger store that keeps every save for inspection."""

    def __init__(self, transactions: Sequence[Transaction] = ()):
        self._stored = list(transactions)
        self.saves: list[list[Transaction]] = []
        self.fail_saves = False

    @property
    def location(self) -> str:
        return "memory"

    def load(self) -> tuple[list[Transaction], LoadResult]:
        return list(self._stored), LoadResult(
            file_found=True, loaded=len(self._stored)
        )

    def save(self, transactions: Sequence[Transaction]) -> None:
        if self.fail_saves:
            raise PersistenceError("Failed to save ledger memory: disk full")
        self._stored = list(transactions)
        self.saves.append(list(transactions))

    @property
    def stored(self) -> list[Transaction]:
        return list(self._stored)


def make_tx(
    amount: str = "10.00",
    category: str = "misc",
    date: str = "2024-05-01",
    description: str = "",
    is_credit: bool = False,
) -> Transaction:
    return Transaction(
        amount=Decimal(amount),
        category=category,
        date=date,
        description=description,
        is_credit=is_credit,
    )


@pytest.fixture
def ledger_path(tmp_path):
    return tmp_path / "transactions.csv"


@pytest.fixture
def settings(tmp_path, ledger_path):
    return LedgerSettings(
        data_file=ledger_path,
        durability=DurabilityPolicy.WRITE_THROUGH,
        malformed_lines=MalformedLinePolicy.SKIP,
        save_retry_attempts=1,
        log_file=tmp_path / "ledger.log",
    )


@pytest.fixture
def memory_storage():
    return InMemoryStorage()
