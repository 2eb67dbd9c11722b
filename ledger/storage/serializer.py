"""
Ledger Record Serializer

One transaction is one record:

    date,category,amount,description,creditFlag

DESIGN DECISION: Records are written with the csv module's default
dialect (minimal quoting) instead of joining fields with bare commas.
A category or description containing a comma or a quote is quoted, so
it reads back unchanged. Records without such characters are identical
to plain comma-joined lines, so older ledger files still load.

The amount is always written with two decimals ("100.00").

A record never spans lines: line breaks inside text fields are written
as spaces, so every physical line of a ledger file parses on its own.
"""

import csv
import io
from decimal import Decimal, InvalidOperation

from ledger.models.transaction import Transaction
from ledger.storage.interface import MalformedRecordError


FIELD_COUNT = 5
LINE_BREAKS = str.maketrans({"\r": " ", "\n": " "})


def transaction_to_line(transaction: Transaction) -> str:
    """Render a transaction as one record, without a line terminator."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="")
    writer.writerow([field.translate(LINE_BREAKS) for field in transaction.to_row()])
    return buffer.getvalue()


def transaction_from_row(row: list[str]) -> Transaction:
    """
    Build a transaction from already-split record fields.

    Raises:
        MalformedRecordError: Wrong field count or unreadable amount
    """
    if len(row) != FIELD_COUNT:
        raise MalformedRecordError(
            f"expected {FIELD_COUNT} fields, found {len(row)}",
            line=",".join(row),
        )

    raw_amount = row[2].strip()
    try:
        amount = Decimal(raw_amount)
    except InvalidOperation:
        raise MalformedRecordError(
            f"amount is not a number: {raw_amount!r}",
            line=",".join(row),
        )

    if not amount.is_finite():
        raise MalformedRecordError(
            f"amount is not finite: {raw_amount!r}",
            line=",".join(row),
        )
    if amount < 0:
        raise MalformedRecordError(
            f"amount is negative: {raw_amount!r}",
            line=",".join(row),
        )

    try:
        return Transaction.from_row(row, amount)
    except ValueError as e:
        raise MalformedRecordError(str(e), line=",".join(row))


def transaction_from_line(line: str) -> Transaction:
    """
    Parse one record back into a transaction.

    Raises:
        MalformedRecordError: If the line is not a valid record
    """
    try:
        rows = list(csv.reader([line]))
    except csv.Error as e:
        raise MalformedRecordError(str(e), line=line)

    if not rows:
        raise MalformedRecordError("empty record", line=line)

    try:
        return transaction_from_row(rows[0])
    except MalformedRecordError as e:
        raise MalformedRecordError(e.reason, line=line)
