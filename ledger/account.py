"""
Account: the in-memory ledger

This module owns the ordered transaction collection and the running
balance, and decides when the ledger is written to storage.

INVARIANT: after every mutation,
    balance == sum(t.signed_amount for t in transactions)

DESIGN DECISION: Durability is an explicit policy.
- WRITE_THROUGH: every added transaction rewrites the whole ledger file
- ON_EXIT: changes stay in memory until flush() (menu exit)

If a write fails, the transaction is kept in memory, the account stays
dirty and the StorageError reaches the caller. A later save or flush
retries the write with everything recorded so far.
"""

from decimal import Decimal
from typing import Optional, Union

from ledger.audit import AuditLogger
from ledger.config import DurabilityPolicy, LedgerSettings, get_settings
from ledger.models.transaction import (
    LoadResult,
    QueryResult,
    SearchField,
    SortKey,
    Transaction,
)
from ledger.queries import QueryExecutor
from ledger.queries.executor import field_name
from ledger.queries.formatter import (
    format_all,
    format_balance,
    format_monthly_report,
    format_search,
)
from ledger.storage import CsvFileStorage, LedgerStorageInterface, StorageError


ZERO = Decimal("0.00")


class Account:
    """
    A single-user ledger with a running balance.

    Transactions are appended in insertion order; only the explicit
    sort operations reorder them.
    """

    def __init__(
        self,
        storage: Optional[LedgerStorageInterface] = None,
        audit_logger: Optional[AuditLogger] = None,
        durability: Optional[DurabilityPolicy] = None,
        settings: Optional[LedgerSettings] = None,
    ):
        settings = settings or get_settings()
        self._storage = storage or CsvFileStorage(settings=settings)
        self._audit_logger = audit_logger or AuditLogger()
        self._durability = durability or settings.durability
        self._transactions: list[Transaction] = []
        self._balance = ZERO
        self._dirty = False
        self._queries = QueryExecutor(self)

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def balance(self) -> Decimal:
        return self._balance

    @property
    def transactions(self) -> tuple[Transaction, ...]:
        """Snapshot of the ledger in current order."""
        return tuple(self._transactions)

    @property
    def durability(self) -> DurabilityPolicy:
        return self._durability

    @property
    def is_dirty(self) -> bool:
        """True when memory holds changes the storage has not seen."""
        return self._dirty

    def __len__(self) -> int:
        return len(self._transactions)

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def add_transaction(self, transaction: Transaction) -> None:
        """
        Record a transaction and update the balance.

        No validation happens here; inputs are checked at the boundary.
        Under WRITE_THROUGH the whole ledger is saved immediately.

        Raises:
            StorageError: If the write-through save fails
        """
        self._transactions.append(transaction)
        self._balance += transaction.signed_amount
        self._dirty = True

        self._audit_logger.log_transaction_added(
            amount=f"{transaction.amount:.2f}",
            category=transaction.category,
            date=transaction.date,
            is_credit=transaction.is_credit,
            balance=f"{self._balance:.2f}",
        )

        if self._durability == DurabilityPolicy.WRITE_THROUGH:
            self.save_to_file()

    def sort_transactions_by_date(self) -> None:
        """Stable ascending sort on the YYYY-MM-DD date string."""
        self._transactions.sort(key=lambda t: t.date)
        self._after_sort(SortKey.DATE)

    def sort_transactions_by_amount(self) -> None:
        """Stable descending sort on amount; ties keep their order."""
        # reverse=True would flip equal amounts, so negate the key instead
        self._transactions.sort(key=lambda t: -t.amount)
        self._after_sort(SortKey.AMOUNT)

    def sort_transactions(self, key: Union[SortKey, str]) -> None:
        """
        Reorder the ledger by date or amount.

        Raises:
            ValueError: If the key is not a supported ordering
        """
        sort_key = SortKey(key)
        if sort_key == SortKey.DATE:
            self.sort_transactions_by_date()
        else:
            self.sort_transactions_by_amount()

    def _after_sort(self, key: SortKey) -> None:
        if self._transactions and self._durability == DurabilityPolicy.ON_EXIT:
            # Deferred ledgers keep the order they had at exit
            self._dirty = True
        self._audit_logger.log_ledger_sorted(key.value, len(self._transactions))

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def load_from_file(self) -> LoadResult:
        """
        Replace the in-memory ledger with the stored one.

        The balance is rebuilt from the transactions; a missing ledger
        loads as empty.

        Raises:
            StorageError: If the ledger cannot be read, or a line is
                malformed under the fail-fast policy
        """
        try:
            transactions, result = self._storage.load()
        except StorageError as e:
            self._audit_logger.log_load_failed(self._storage.location, str(e))
            raise

        self._transactions = list(transactions)
        self._balance = self._recompute_balance()
        self._dirty = False

        for record in result.skipped:
            self._audit_logger.log_malformed_record(record.line_number, record.reason)
        self._audit_logger.log_ledger_loaded(
            path=self._storage.location,
            loaded=result.loaded,
            skipped=len(result.skipped),
            balance=f"{self._balance:.2f}",
        )
        return result

    def save_to_file(self) -> None:
        """
        Write every transaction, in current order, replacing the stored ledger.

        Raises:
            StorageError: If the write fails; the account stays dirty
        """
        try:
            self._storage.save(self._transactions)
        except StorageError as e:
            self._audit_logger.log_save_failed(self._storage.location, str(e))
            raise

        self._dirty = False
        self._audit_logger.log_ledger_saved(
            self._storage.location, len(self._transactions)
        )

    def flush(self) -> bool:
        """Save pending changes. Returns True if a write happened."""
        if not self._dirty:
            return False
        self.save_to_file()
        return True

    def _recompute_balance(self) -> Decimal:
        return sum((t.signed_amount for t in self._transactions), ZERO)

    # -------------------------------------------------------------------------
    # Queries and reports
    # -------------------------------------------------------------------------

    def search_transactions(
        self,
        field: Union[SearchField, str],
        value: str,
    ) -> QueryResult:
        """Exact match on category or date, in ledger order."""
        result = self._queries.search(field, value)
        self._audit_logger.log_search_executed(
            field_name(field), value, result.result_count
        )
        return result

    def monthly_report(self, month_year: str) -> QueryResult:
        """Transactions in YYYY-MM with totals; failed result on bad format."""
        result = self._queries.monthly_report(month_year)
        if result.success:
            self._audit_logger.log_report_generated(month_year, result.result_count)
        else:
            self._audit_logger.log_invalid_input("month_year", month_year)
        return result

    def display_balance(self) -> str:
        return format_balance(self._balance)

    def display_all(self) -> str:
        return format_all(self._balance, self._transactions)

    def display_search(self, field: Union[SearchField, str], value: str) -> str:
        result = self.search_transactions(field, value)
        return format_search(result, field_name(field))

    def display_monthly_report(self, month_year: str) -> str:
        return format_monthly_report(self.monthly_report(month_year), month_year)
