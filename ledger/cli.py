"""
Interactive menu for the Personal Ledger

The shell only collects input and dispatches to the Account:
- Every value is validated here and re-prompted until acceptable
- Nothing the user types can crash the loop
- Storage failures are reported, never swallowed

DESIGN PRINCIPLES:
1. Inputs are validated before a Transaction exists
2. No-match results are messages, not errors
3. Exit always tries to save pending changes
"""

import sys
from typing import Callable, Optional

from pydantic import ValidationError

from ledger.account import Account
from ledger.audit import AuditLogger, configure_logging
from ledger.config import LedgerSettings, get_settings
from ledger.models.transaction import SearchField, SortKey, Transaction
from ledger.queries.formatter import format_load_result
from ledger.storage import StorageError
from ledger.validation import (
    is_valid_date,
    is_valid_month_year,
    parse_amount,
    parse_credit_flag,
)


MENU = (
    "\nMenu:\n"
    "1. Add Transaction\n"
    "2. View All Transactions\n"
    "3. Search Transactions\n"
    "4. Monthly Report\n"
    "5. Sort Transactions\n"
    "6. Exit"
)

DATE_ERROR = "Invalid format. Please enter a valid date in YYYY-MM-DD."
MONTH_ERROR = "Invalid format. Please enter in YYYY-MM format."
AMOUNT_ERROR = "Invalid amount. Please enter a non-negative number."
FLAG_ERROR = "Invalid choice. Please enter 1 for Credit or 0 for Debit."


class ExitShell(Exception):
    """Raised when the input stream ends."""
    pass


class LedgerShell:
    """
    Menu loop over an Account.

    Input and output are injected so the shell can be driven by tests.
    """

    def __init__(
        self,
        account: Account,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
        strict_calendar: bool = False,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._account = account
        self._input = input_fn
        self._output = output_fn
        self._strict_calendar = strict_calendar
        self._audit_logger = audit_logger or AuditLogger()

    # -------------------------------------------------------------------------
    # Input helpers
    # -------------------------------------------------------------------------

    def _ask(self, prompt: str) -> str:
        """Read one answer, trimmed; used for choices and validated values."""
        return self._ask_text(prompt).strip()

    def _ask_text(self, prompt: str) -> str:
        """Read free text; only leading whitespace is dropped."""
        try:
            return self._input(prompt).lstrip()
        except EOFError:
            raise ExitShell()

    def _ask_until(
        self,
        prompt: str,
        parse: Callable[[str], object],
        error: str,
        field: str,
    ):
        """Prompt until parse accepts the input (returns non-None)."""
        while True:
            raw = self._ask(prompt)
            value = parse(raw)
            if value is not None:
                return value
            self._audit_logger.log_invalid_input(field, raw)
            self._output(error)

    # -------------------------------------------------------------------------
    # Menu actions
    # -------------------------------------------------------------------------

    def add_transaction(self) -> None:
        amount = self._ask_until(
            "Enter amount: ", parse_amount, AMOUNT_ERROR, "amount"
        )
        category = self._ask_text("Enter category: ")
        date = self._ask_until(
            "Enter date (YYYY-MM-DD): ",
            self._parse_date,
            DATE_ERROR,
            "date",
        )
        description = self._ask_text("Enter description: ")
        is_credit = self._ask_until(
            "Is this Credit (1) or Debit (0)? ",
            parse_credit_flag,
            FLAG_ERROR,
            "credit_flag",
        )

        transaction = Transaction(
            amount=amount,
            category=category,
            date=date,
            description=description,
            is_credit=is_credit,
        )
        try:
            self._account.add_transaction(transaction)
        except StorageError as e:
            self._output(f"Transaction recorded but could not be saved: {e}")
            return
        self._output("Transaction added successfully.")

    def view_all(self) -> None:
        self._output(self._account.display_all())

    def search(self) -> None:
        self._output("Search by: 1. Category 2. Date")
        choice = self._ask("Choose an option: ")

        if choice == "2":
            field = SearchField.DATE
            value = self._ask_until(
                "Enter date (YYYY-MM-DD): ",
                self._parse_date,
                DATE_ERROR,
                "date",
            )
        else:
            field = SearchField.CATEGORY
            value = self._ask_text("Enter category: ")

        self._output(self._account.display_search(field, value))

    def monthly_report(self) -> None:
        month_year = self._ask_until(
            "Enter month and year (YYYY-MM): ",
            lambda raw: raw if is_valid_month_year(raw) else None,
            MONTH_ERROR,
            "month_year",
        )
        self._output(self._account.display_monthly_report(month_year))

    def sort(self) -> None:
        self._output("Sort by: 1. Date 2. Amount")
        choice = self._ask("Choose an option: ")

        keys = {"1": SortKey.DATE, "2": SortKey.AMOUNT}
        if choice not in keys:
            self._output("Invalid choice.")
            return

        key = keys[choice]
        self._account.sort_transactions(key)
        self._output(f"Transactions sorted by {key.value}:")
        self._output(self._account.display_all())

    def exit(self) -> None:
        """Save pending changes before leaving."""
        try:
            self._account.flush()
        except StorageError as e:
            self._output(f"Could not save the ledger: {e}")
        self._output("Exiting program. Goodbye!")

    def _parse_date(self, raw: str) -> Optional[str]:
        return raw if is_valid_date(raw, strict=self._strict_calendar) else None

    # -------------------------------------------------------------------------
    # Loop
    # -------------------------------------------------------------------------

    def run(self) -> None:
        actions = {
            "1": self.add_transaction,
            "2": self.view_all,
            "3": self.search,
            "4": self.monthly_report,
            "5": self.sort,
        }

        while True:
            self._output(MENU)
            try:
                choice = self._ask("Choose an option: ")
                if choice == "6":
                    break
                action = actions.get(choice)
                if action is None:
                    self._output("Invalid option. Please try again.")
                    continue
                action()
            except (ExitShell, KeyboardInterrupt):
                break

        self.exit()


def main(
    settings: Optional[LedgerSettings] = None,
    input_fn: Callable[[str], str] = input,
    output_fn: Callable[[str], None] = print,
) -> int:
    """
    Console entry point.

    Returns the process exit status.
    """
    if settings is None:
        try:
            settings = get_settings()
        except ValidationError as e:
            output_fn(f"Invalid configuration: {e}")
            return 2

    configure_logging(settings)

    account = Account(settings=settings)
    try:
        load_result = account.load_from_file()
    except StorageError as e:
        output_fn(f"Could not load the ledger: {e}")
        return 1

    notice = format_load_result(load_result, str(settings.data_file))
    if notice:
        output_fn(notice)

    shell = LedgerShell(
        account,
        input_fn=input_fn,
        output_fn=output_fn,
        strict_calendar=settings.strict_calendar,
    )
    shell.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
