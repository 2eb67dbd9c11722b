"""
Audit Logger

DESIGN DECISION: Every significant action on the ledger is logged.
This provides:
1. Traceability of additions, loads and saves
2. Debugging capability when the ledger file is damaged

The audit logger:
- Writes structured JSON through structlog
- Never raises (logging must not change what the ledger does)
- Goes to stderr or a log file, never to the interactive screen
"""

import logging
from typing import Optional

import structlog

from ledger.config import LedgerSettings, get_settings
from ledger.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(settings: Optional[LedgerSettings] = None) -> None:
    """
    Route stdlib logging (and therefore structlog) to the configured sink.

    Called once by the CLI at startup.
    """
    settings = settings or get_settings()

    if settings.log_file is not None:
        handler: logging.Handler = logging.FileHandler(
            settings.log_file, encoding="utf-8"
        )
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(settings.log_level)


class AuditLogger:
    """
    Central audit logging service for the ledger.
    """

    def __init__(self):
        self._logger = structlog.get_logger("ledger.audit")

    def log(self, event: AuditEvent) -> None:
        """Log an audit event at a level matching its severity."""
        log_dict = event.to_log_dict()

        if event.severity == AuditSeverity.ERROR:
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

    def log_ledger_loaded(
        self,
        path: str,
        loaded: int,
        skipped: int,
        balance: str,
    ) -> None:
        """Log a completed load."""
        self.log(AuditEventBuilder.ledger_loaded(
            path=path,
            loaded=loaded,
            skipped=skipped,
            balance=balance,
        ))

    def log_load_failed(self, path: str, error_message: str) -> None:
        self.log(AuditEventBuilder.load_failed(path, error_message))

    def log_malformed_record(self, line_number: int, reason: str) -> None:
        self.log(AuditEventBuilder.malformed_record_skipped(line_number, reason))

    def log_ledger_saved(self, path: str, count: int) -> None:
        self.log(AuditEventBuilder.ledger_saved(path, count))

    def log_save_failed(self, path: str, error_message: str) -> None:
        self.log(AuditEventBuilder.save_failed(path, error_message))

    def log_transaction_added(
        self,
        amount: str,
        category: str,
        date: str,
        is_credit: bool,
        balance: str,
    ) -> None:
        """Log a new ledger entry."""
        self.log(AuditEventBuilder.transaction_added(
            amount=amount,
            category=category,
            date=date,
            is_credit=is_credit,
            balance=balance,
        ))

    def log_ledger_sorted(self, key: str, count: int) -> None:
        self.log(AuditEventBuilder.ledger_sorted(key, count))

    def log_search_executed(self, field: str, value: str, result_count: int) -> None:
        self.log(AuditEventBuilder.search_executed(field, value, result_count))

    def log_report_generated(self, month_year: str, result_count: int) -> None:
        self.log(AuditEventBuilder.report_generated(month_year, result_count))

    def log_invalid_input(self, field: str, value: str) -> None:
        self.log(AuditEventBuilder.invalid_input(field, value))
