"""Console rendering of ledger data and query results."""

from decimal import Decimal
from typing import Iterable

from ledger.models.transaction import LoadResult, QueryResult, Transaction


def format_transaction(t: Transaction) -> str:
    return (
        f"Date: {t.date}, Category: {t.category}, "
        f"Amount: {t.amount:.2f}, Description: {t.description}, "
        f"Type: {t.type_label}"
    )


def format_balance(balance: Decimal) -> str:
    return f"Current Balance: {balance:.2f}"


def format_all(balance: Decimal, transactions: Iterable[Transaction]) -> str:
    lines = [format_balance(balance), "All Transactions:"]
    lines.extend(format_transaction(t) for t in transactions)
    return "\n".join(lines)


def format_search(result: QueryResult, field: str) -> str:
    """Render a search: the header, then matches or the no-match message."""
    lines = [result.query_description]
    if not result.success:
        lines.append(result.error_message or "Search failed.")
    elif not result.data_found:
        lines.append(f"No match found for the {field} entered. Please try again.")
    else:
        lines.extend(format_transaction(t) for t in result.transactions)
    return "\n".join(lines)


def format_monthly_report(result: QueryResult, month_year: str) -> str:
    """Render a monthly report, or only the format error if it failed."""
    if not result.success:
        return result.error_message or "Report failed."

    lines = [f"{result.query_description}:"]
    if not result.data_found:
        lines.append(f"No transactions found for the month {month_year}.")
        return "\n".join(lines)

    lines.extend(format_transaction(t) for t in result.transactions)
    if result.summary is not None:
        summary = result.summary
        lines.append(
            f"Total credits: {summary.total_credits:.2f}, "
            f"Total debits: {summary.total_debits:.2f}, "
            f"Net: {summary.net:.2f}"
        )
    return "\n".join(lines)


def format_load_result(result: LoadResult, location: str) -> str:
    """Startup notice; empty when there is nothing worth telling the user."""
    if not result.has_skipped:
        return ""
    lines = [f"Warning: {len(result.skipped)} unreadable line(s) in {location} were skipped:"]
    for record in result.skipped:
        lines.append(f"  line {record.line_number}: {record.reason}")
    return "\n".join(lines)
