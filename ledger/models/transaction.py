"""
Core Data Models for Personal Ledger

These models define the schemas for everything the ledger stores and reports.
They are designed to:
1. Be immutable once constructed (a recorded transaction never changes)
2. Carry money as Decimal with two-decimal semantics
3. Be serializable for storage and logging

DESIGN DECISION: Transaction performs no business validation.
Date format, amount sign and free-text contents are checked at the
input boundary (see ledger.validation). The model only normalizes the
amount to cents, so the value on screen and the value on disk are the
same number.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


CENT = Decimal("0.01")

CREDIT_FLAG = "1"
DEBIT_FLAG = "0"


def quantize_amount(value: Decimal) -> Decimal:
    """Round a decimal to cents (half-up)."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class SearchField(str, Enum):
    """Transaction attributes that can be searched by exact match."""
    CATEGORY = "category"
    DATE = "date"


class SortKey(str, Enum):
    """Supported orderings of the ledger."""
    DATE = "date"      # ascending, lexicographic on YYYY-MM-DD
    AMOUNT = "amount"  # descending


# =============================================================================
# CORE TRANSACTION MODEL
# =============================================================================

class Transaction(BaseModel):
    """
    One ledger entry.

    Immutable after construction. Owned exclusively by the Account
    once it has been added.
    """
    model_config = ConfigDict(frozen=True)

    amount: Decimal = Field(
        ...,
        description="Amount, two-decimal fixed point"
    )
    category: str = Field(
        ...,
        description="Free-text category label"
    )
    date: str = Field(
        ...,
        description="Transaction date as YYYY-MM-DD"
    )
    description: str = Field(
        default="",
        description="Free-text description"
    )
    is_credit: bool = Field(
        ...,
        description="True for an inflow, False for an outflow"
    )

    @field_validator('amount')
    @classmethod
    def round_to_cents(cls, v: Decimal) -> Decimal:
        try:
            return quantize_amount(v)
        except InvalidOperation:
            raise ValueError(f"Amount cannot be represented in cents: {v}")

    @property
    def signed_amount(self) -> Decimal:
        """Amount as it affects the balance."""
        return self.amount if self.is_credit else -self.amount

    @property
    def month(self) -> str:
        """YYYY-MM prefix of the date."""
        return self.date[:7]

    @property
    def type_label(self) -> str:
        return "Credit" if self.is_credit else "Debit"

    def matches(self, field: SearchField, value: str) -> bool:
        """Exact, case-sensitive match on a searchable attribute."""
        if field == SearchField.CATEGORY:
            return self.category == value
        return self.date == value

    def to_row(self) -> list[str]:
        """
        Convert to a storage row.

        Returns columns in order:
        [date, category, amount, description, credit_flag]
        """
        return [
            self.date,
            self.category,
            f"{self.amount:.2f}",
            self.description,
            CREDIT_FLAG if self.is_credit else DEBIT_FLAG,
        ]

    @classmethod
    def from_row(cls, row: list[str], amount: Decimal) -> "Transaction":
        """
        Build a transaction from a storage row.

        The amount is passed already parsed; any flag other than "1"
        is a debit.
        """
        date, category, _, description, flag = row
        return cls(
            amount=amount,
            category=category,
            date=date,
            description=description,
            is_credit=flag == CREDIT_FLAG,
        )


# =============================================================================
# REPORT MODELS
# =============================================================================

class MonthlySummary(BaseModel):
    """Totals for one month of the ledger."""

    month_year: str
    count: int = Field(ge=0)
    total_credits: Decimal = Decimal("0.00")
    total_debits: Decimal = Decimal("0.00")

    @property
    def net(self) -> Decimal:
        return self.total_credits - self.total_debits

    @classmethod
    def from_transactions(
        cls,
        month_year: str,
        transactions: list[Transaction],
    ) -> "MonthlySummary":
        credits = sum(
            (t.amount for t in transactions if t.is_credit), Decimal("0.00")
        )
        debits = sum(
            (t.amount for t in transactions if not t.is_credit), Decimal("0.00")
        )
        return cls(
            month_year=month_year,
            count=len(transactions),
            total_credits=credits,
            total_debits=debits,
        )


class QueryResult(BaseModel):
    """
    Result of a search or report over the ledger.

    An empty result is a normal outcome (data_found=False), not a failure.
    success=False is reserved for queries that could not run at all,
    such as a badly formatted month.
    """

    success: bool
    error_message: Optional[str] = None

    data_found: bool = Field(
        ...,
        description="Was any transaction matched?"
    )
    result_count: int = Field(
        ge=0,
        description="Number of matched transactions"
    )
    transactions: list[Transaction] = Field(
        default_factory=list,
        description="Matched transactions in ledger order"
    )
    summary: Optional[MonthlySummary] = None

    query_description: str = Field(
        ...,
        description="Human-readable description of what was queried"
    )

    @classmethod
    def failed(cls, error_message: str, query_description: str) -> "QueryResult":
        return cls(
            success=False,
            error_message=error_message,
            data_found=False,
            result_count=0,
            query_description=query_description,
        )


class SkippedRecord(BaseModel):
    """A persistence line that could not be loaded."""

    line_number: int = Field(ge=1)
    line: str
    reason: str


class LoadResult(BaseModel):
    """Outcome of reading the ledger file."""

    file_found: bool
    loaded: int = Field(default=0, ge=0)
    skipped: list[SkippedRecord] = Field(default_factory=list)

    @property
    def has_skipped(self) -> bool:
        return bool(self.skipped)
