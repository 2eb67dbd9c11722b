"""Tests for the input validators."""

from decimal import Decimal

import pytest

from ledger.validation import (
    is_leap_year,
    is_valid_date,
    is_valid_month_year,
    parse_amount,
    parse_credit_flag,
)


class TestIsValidDate:
    """Tests for YYYY-MM-DD validation."""

    @pytest.mark.parametrize("value", [
        "2024-05-01",
        "2024-02-29",  # leap year
        "2000-02-29",  # divisible by 400
        "2023-02-28",
        "2024-12-31",
        "0001-01-01",
    ])
    def test_valid_dates(self, value):
        assert is_valid_date(value) is True

    @pytest.mark.parametrize("value", [
        "2023-02-29",  # not a leap year
        "1900-02-29",  # divisible by 100 but not 400
        "2024-02-30",
        "2024-13-01",
        "2024-00-10",
        "2024-01-32",
        "2024-01-00",
        "2024/01/01",
        "2024-1-01",
        "2024-01-1",
        "24-01-2024",
        "2024-01-01 ",
        "abcd-ef-gh",
        "+024-01-01",
        "",
    ])
    def test_invalid_dates(self, value):
        assert is_valid_date(value) is False

    def test_non_string_is_invalid(self):
        assert is_valid_date(None) is False
        assert is_valid_date(20240501) is False

    def test_lax_month_lengths_by_default(self):
        """Only February is checked against its real length."""
        assert is_valid_date("2024-04-31") is True
        assert is_valid_date("2024-06-31") is True

    def test_strict_month_lengths(self):
        assert is_valid_date("2024-04-31", strict=True) is False
        assert is_valid_date("2024-04-30", strict=True) is True
        assert is_valid_date("2024-02-29", strict=True) is True
        assert is_valid_date("2023-02-29", strict=True) is False

    def test_leap_year_rule(self):
        assert is_leap_year(2024)
        assert is_leap_year(2000)
        assert not is_leap_year(1900)
        assert not is_leap_year(2023)


class TestIsValidMonthYear:
    """Tests for YYYY-MM validation."""

    @pytest.mark.parametrize("value", ["2024-01", "2024-12", "0000-06", "9999-09"])
    def test_valid(self, value):
        assert is_valid_month_year(value) is True

    @pytest.mark.parametrize("value", [
        "2024-13",
        "2024-00",
        "2024/01",
        "202401",
        "2024-1",
        "2024-01-01",
        "24-01",
        "",
    ])
    def test_invalid(self, value):
        assert is_valid_month_year(value) is False


class TestParseAmount:
    """Tests for amount input parsing."""

    def test_parses_and_rounds(self):
        assert parse_amount("12.5") == Decimal("12.50")
        assert parse_amount(" 3.456 ") == Decimal("3.46")
        assert parse_amount("0") == Decimal("0.00")

    @pytest.mark.parametrize("value", ["-1", "abc", "", "nan", "inf", "1e999999", "1,000"])
    def test_rejects(self, value):
        assert parse_amount(value) is None

    def test_zero_is_not_rejected(self):
        """A zero amount is falsy but still a valid amount."""
        assert parse_amount("0.00") is not None


class TestParseCreditFlag:
    def test_flags(self):
        assert parse_credit_flag("1") is True
        assert parse_credit_flag("0") is False
        assert parse_credit_flag(" 1 ") is True

    @pytest.mark.parametrize("value", ["", "2", "yes", "credit", "01"])
    def test_rejects(self, value):
        assert parse_credit_flag(value) is None
