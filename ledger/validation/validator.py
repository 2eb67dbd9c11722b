"""
Input Validators

Pure checks applied at the input boundary before a Transaction is built
or a report is run. Every function here is total: it never raises and
always answers with a boolean (or None for "not parseable").

DESIGN DECISION: Date validation only enforces February's length by
default. Other months accept any day from 1 to 31, so "2024-04-31"
passes, matching ledger files written before strict checking existed.
Pass strict=True to check real calendar month lengths.
"""

import calendar
import re
from decimal import Decimal, InvalidOperation
from typing import Optional

from ledger.models.transaction import CREDIT_FLAG, DEBIT_FLAG, quantize_amount


DATE_PATTERN = re.compile(r"([0-9]{4})-([0-9]{2})-([0-9]{2})")
MONTH_YEAR_PATTERN = re.compile(r"([0-9]{4})-([0-9]{2})")


def is_leap_year(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def is_valid_date(value: str, strict: bool = False) -> bool:
    """
    Check a YYYY-MM-DD date string.

    Args:
        value: Candidate date
        strict: Also reject days past the real end of the month

    Returns:
        True if the date is acceptable
    """
    if not isinstance(value, str) or len(value) != 10:
        return False

    match = DATE_PATTERN.fullmatch(value)
    if match is None:
        return False

    year, month, day = (int(part) for part in match.groups())
    if month < 1 or month > 12 or day < 1 or day > 31:
        return False

    if strict:
        return day <= calendar.monthrange(year, month)[1]

    if month == 2:
        return day <= (29 if is_leap_year(year) else 28)

    return True


def is_valid_month_year(value: str) -> bool:
    """Check a YYYY-MM month string (month 1-12, any year)."""
    if not isinstance(value, str) or len(value) != 7:
        return False

    match = MONTH_YEAR_PATTERN.fullmatch(value)
    if match is None:
        return False

    month = int(match.group(2))
    return 1 <= month <= 12


def parse_amount(value: str) -> Optional[Decimal]:
    """
    Parse user-entered amount text.

    Accepts finite, non-negative decimals. The result is rounded to cents.
    Returns None for anything else.
    """
    if not isinstance(value, str):
        return None
    try:
        amount = Decimal(value.strip())
    except InvalidOperation:
        return None
    if not amount.is_finite() or amount < 0:
        return None
    try:
        return quantize_amount(amount)
    except InvalidOperation:
        # Too many digits to represent in cents
        return None


def parse_credit_flag(value: str) -> Optional[bool]:
    """Map "1" to credit (True) and "0" to debit (False)."""
    if not isinstance(value, str):
        return None
    flag = value.strip()
    if flag == CREDIT_FLAG:
        return True
    if flag == DEBIT_FLAG:
        return False
    return None
