"""
Tests for the interactive menu

The shell is driven with scripted answers; running out of answers
behaves like end of input.
"""

from decimal import Decimal

import pytest

from ledger.account import Account
from ledger.cli import (
    AMOUNT_ERROR,
    DATE_ERROR,
    FLAG_ERROR,
    MONTH_ERROR,
    LedgerShell,
    main,
)
from ledger.config import DurabilityPolicy, MalformedLinePolicy
from tests.conftest import make_tx


def scripted(*answers):
    """input() replacement that raises EOFError when the script ends."""
    remaining = list(answers)

    def _input(prompt):
        if not remaining:
            raise EOFError
        return remaining.pop(0)

    return _input


@pytest.fixture
def output():
    return []


@pytest.fixture
def account(memory_storage, settings):
    return Account(storage=memory_storage, settings=settings)


def run_shell(account, output, *answers, strict_calendar=False):
    shell = LedgerShell(
        account,
        input_fn=scripted(*answers),
        output_fn=output.append,
        strict_calendar=strict_calendar,
    )
    shell.run()
    return "\n".join(output)


class TestAddFlow:
    """Tests for menu option 1."""

    def test_add_credit(self, account, output, memory_storage):
        text = run_shell(
            account, output,
            "1", "100.00", "salary", "2024-05-01", "May pay", "1",
            "6",
        )
        assert "Transaction added successfully." in text
        assert account.balance == Decimal("100.00")
        assert account.transactions[0].description == "May pay"
        assert len(memory_storage.saves) == 1
        assert text.endswith("Exiting program. Goodbye!")

    def test_reprompts_until_valid(self, account, output):
        text = run_shell(
            account, output,
            "1",
            "abc", "-5", "30",              # amount
            "groceries",
            "2024-02-30", "2024/05/02", "2024-05-02",  # date
            "weekly shop",
            "yes", "0",                     # credit flag
            "6",
        )
        assert text.count(AMOUNT_ERROR) == 2
        assert text.count(DATE_ERROR) == 2
        assert text.count(FLAG_ERROR) == 1
        t = account.transactions[0]
        assert t.amount == Decimal("30.00")
        assert t.date == "2024-05-02"
        assert t.is_credit is False
        assert account.balance == Decimal("-30.00")

    def test_free_text_keeps_trailing_whitespace(self, account, output):
        run_shell(
            account, output,
            "1", " 12.50 ", "  rent ", " 2024-05-01 ", "  May rent  ", " 0 ",
            "6",
        )
        t = account.transactions[0]
        assert t.category == "rent "
        assert t.description == "May rent  "
        assert t.amount == Decimal("12.50")
        assert t.date == "2024-05-01"
        assert t.is_credit is False

    def test_zero_amount_accepted(self, account, output):
        run_shell(account, output, "1", "0", "misc", "2024-05-01", "", "1", "6")
        assert account.transactions[0].amount == Decimal("0.00")

    def test_strict_calendar(self, account, output):
        text = run_shell(
            account, output,
            "1", "5", "misc", "2024-04-31", "2024-04-30", "", "0", "6",
            strict_calendar=True,
        )
        assert text.count(DATE_ERROR) == 1
        assert account.transactions[0].date == "2024-04-30"

    def test_save_failure_reported(self, account, output, memory_storage):
        memory_storage.fail_saves = True
        text = run_shell(account, output, "1", "5", "misc", "2024-05-01", "", "1", "6")
        assert "Transaction recorded but could not be saved" in text
        assert "Transaction added successfully." not in text
        assert "Could not save the ledger" in text
        assert len(account) == 1


class TestOtherFlows:
    """Tests for view, search, report and sort."""

    @pytest.fixture
    def populated(self, account):
        account.add_transaction(make_tx(amount="100", category="salary", date="2024-05-01", is_credit=True))
        account.add_transaction(make_tx(amount="30", category="groceries", date="2024-05-02"))
        return account

    def test_view_all(self, populated, output):
        text = run_shell(populated, output, "2", "6")
        assert "Current Balance: 70.00" in text
        assert "Category: groceries" in text

    def test_search_category(self, populated, output):
        text = run_shell(populated, output, "3", "1", "groceries", "6")
        assert "Searching for transactions with category: groceries" in text
        assert "Amount: 30.00" in text

    def test_search_category_no_match(self, populated, output):
        text = run_shell(populated, output, "3", "1", "travel", "6")
        assert "No match found for the category entered. Please try again." in text

    def test_search_date_reprompts(self, populated, output):
        text = run_shell(populated, output, "3", "2", "May 1st", "2024-05-01", "6")
        assert DATE_ERROR in text
        assert "Searching for transactions with date: 2024-05-01" in text
        assert "Category: salary" in text

    def test_monthly_report_reprompts(self, populated, output):
        text = run_shell(populated, output, "4", "2024-13", "2024-05", "6")
        assert MONTH_ERROR in text
        assert "Transactions for 2024-05:" in text
        assert "Net: 70.00" in text

    def test_sort_by_amount(self, populated, output):
        populated.sort_transactions_by_date()
        text = run_shell(populated, output, "5", "2", "6")
        assert "Transactions sorted by amount:" in text
        assert populated.transactions[0].amount == Decimal("100.00")

    def test_sort_invalid_choice(self, populated, output):
        before = populated.transactions
        text = run_shell(populated, output, "5", "3", "6")
        assert "Invalid choice." in text
        assert populated.transactions == before

    def test_invalid_menu_option(self, account, output):
        text = run_shell(account, output, "9", "abc", "6")
        assert text.count("Invalid option. Please try again.") == 2


class TestExit:
    """Tests for leaving the menu."""

    def test_end_of_input_exits(self, account, output):
        text = run_shell(account, output)
        assert text.endswith("Exiting program. Goodbye!")

    def test_end_of_input_mid_flow(self, account, output):
        text = run_shell(account, output, "1", "10", "misc")
        assert text.endswith("Exiting program. Goodbye!")
        assert len(account) == 0

    def test_exit_flushes_pending_changes(self, memory_storage, settings, output):
        account = Account(
            storage=memory_storage,
            durability=DurabilityPolicy.ON_EXIT,
            settings=settings,
        )
        run_shell(account, output, "1", "10", "misc", "2024-05-01", "", "1", "6")
        assert len(memory_storage.saves) == 1
        assert memory_storage.stored[0].amount == Decimal("10.00")


class TestMain:
    """Tests for the console entry point."""

    def test_session_persists_to_file(self, settings, ledger_path, output):
        status = main(
            settings=settings,
            input_fn=scripted("1", "100.00", "salary", "2024-05-01", "May pay", "1", "6"),
            output_fn=output.append,
        )
        assert status == 0
        assert ledger_path.read_text().splitlines() == [
            "2024-05-01,salary,100.00,May pay,1",
        ]

    def test_sort_then_exit_leaves_file_unchanged(self, settings, ledger_path, output):
        content = (
            "2024-05-02,rent,500.00,May rent,0\n"
            "2024-05-01,salary,1000.00,May pay,1\n"
        )
        ledger_path.write_text(content)
        status = main(settings=settings, input_fn=scripted("5", "1", "6"), output_fn=output.append)
        assert status == 0
        assert "Transactions sorted by date:" in "\n".join(output)
        assert ledger_path.read_text() == content

    def test_reports_skipped_lines(self, settings, ledger_path, output):
        ledger_path.write_text("2024-05-01,salary,100.00,May pay,1\nbroken\n")
        status = main(settings=settings, input_fn=scripted("2", "6"), output_fn=output.append)
        assert status == 0
        text = "\n".join(output)
        assert "1 unreadable line(s)" in text
        assert "line 2" in text
        assert "Current Balance: 100.00" in text

    def test_load_failure_exits_without_touching_file(self, settings, ledger_path, output):
        content = "2024-05-01,salary,100.00,May pay,1\nbroken\n"
        ledger_path.write_text(content)
        strict = settings.model_copy(update={"malformed_lines": MalformedLinePolicy.FAIL})
        status = main(settings=strict, input_fn=scripted("6"), output_fn=output.append)
        assert status == 1
        assert "Could not load the ledger" in output[0]
        assert ledger_path.read_text() == content
