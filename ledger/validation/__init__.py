"""Input validation package."""

from ledger.validation.validator import (
    is_leap_year,
    is_valid_date,
    is_valid_month_year,
    parse_amount,
    parse_credit_flag,
)

__all__ = [
    "is_leap_year",
    "is_valid_date",
    "is_valid_month_year",
    "parse_amount",
    "parse_credit_flag",
]
