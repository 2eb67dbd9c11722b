"""
Query Execution Engine

Runs searches and monthly reports over the Account's transactions.

GUARANTEES:
- Only reads; never reorders or mutates the ledger
- Matches are returned in current ledger order
- Clear "no data found" result when nothing matches
- A badly formatted month is a failed result, not an exception
"""

from typing import TYPE_CHECKING, Union

from ledger.models.transaction import (
    MonthlySummary,
    QueryResult,
    SearchField,
)
from ledger.validation import is_valid_month_year

if TYPE_CHECKING:
    from ledger.account import Account


MONTH_FORMAT_ERROR = "Invalid format for month and year. Please use YYYY-MM."


class QueryExecutor:
    """
    Executes queries against an Account.

    The executor holds a reference to the account rather than a copy,
    so it always sees the current order after a sort.
    """

    def __init__(self, account: "Account"):
        self._account = account

    def search(self, field: Union[SearchField, str], value: str) -> QueryResult:
        """Exact, case-sensitive match on category or date."""
        description = f"Searching for transactions with {field_name(field)}: {value}"
        try:
            search_field = SearchField(field)
        except ValueError:
            return QueryResult.failed(
                error_message=f"Unsupported search field: {field}",
                query_description=description,
            )

        matches = [
            t for t in self._account.transactions
            if t.matches(search_field, value)
        ]

        return QueryResult(
            success=True,
            data_found=len(matches) > 0,
            result_count=len(matches),
            transactions=matches,
            query_description=description,
        )

    def monthly_report(self, month_year: str) -> QueryResult:
        """
        Transactions whose date falls in YYYY-MM, with month totals.

        The format is checked first; an invalid month matches nothing.
        """
        if not is_valid_month_year(month_year):
            return QueryResult.failed(
                error_message=MONTH_FORMAT_ERROR,
                query_description=f"Monthly report for {month_year}",
            )

        matches = [t for t in self._account.transactions if t.month == month_year]

        return QueryResult(
            success=True,
            data_found=len(matches) > 0,
            result_count=len(matches),
            transactions=matches,
            summary=MonthlySummary.from_transactions(month_year, matches),
            query_description=f"Transactions for {month_year}",
        )


def field_name(field: Union[SearchField, str]) -> str:
    return field.value if isinstance(field, SearchField) else str(field)
