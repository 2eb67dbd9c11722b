"""
Audit Models for Personal Ledger

Every significant action on the ledger is logged as a typed event.
This provides:
1. Traceability of what was added, loaded and saved
2. Debugging information when the ledger file misbehaves

DESIGN DECISION: Audit events are only ever emitted, never edited.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, field_validator


DESCRIPTION_MAX_LENGTH = 500


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Persistence
    LEDGER_LOADED = "ledger_loaded"
    LOAD_FAILED = "load_failed"
    MALFORMED_RECORD_SKIPPED = "malformed_record_skipped"
    LEDGER_SAVED = "ledger_saved"
    SAVE_FAILED = "save_failed"

    # Mutations
    TRANSACTION_ADDED = "transaction_added"
    LEDGER_SORTED = "ledger_sorted"

    # Queries
    SEARCH_EXECUTED = "search_executed"
    REPORT_GENERATED = "report_generated"

    # Input
    INVALID_INPUT = "invalid_input"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    Every significant action creates one of these.
    """

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )

    event_type: AuditEventType
    severity: AuditSeverity = AuditSeverity.INFO

    description: str = Field(
        ...,
        max_length=DESCRIPTION_MAX_LENGTH,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )
    error_message: Optional[str] = None

    @field_validator("description", mode="before")
    @classmethod
    def clip_description(cls, v: Any) -> Any:
        """Descriptions embed user text of any length; keep the head."""
        if isinstance(v, str) and len(v) > DESCRIPTION_MAX_LENGTH:
            return v[: DESCRIPTION_MAX_LENGTH - 3] + "..."
        return v

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.transaction_added(amount, category, date, True, balance)
        event = AuditEventBuilder.save_failed(path, error)
    """

    @staticmethod
    def ledger_loaded(path: str, loaded: int, skipped: int, balance: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_LOADED,
            description=f"Ledger loaded: {loaded} transactions",
            details={
                "path": path,
                "loaded": loaded,
                "skipped": skipped,
                "balance": balance,
            },
        )

    @staticmethod
    def load_failed(path: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LOAD_FAILED,
            severity=AuditSeverity.ERROR,
            description="Ledger file could not be loaded",
            error_message=error_message,
            details={"path": path},
        )

    @staticmethod
    def malformed_record_skipped(line_number: int, reason: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.MALFORMED_RECORD_SKIPPED,
            severity=AuditSeverity.WARNING,
            description=f"Skipped malformed ledger line {line_number}",
            details={
                "line_number": line_number,
                "reason": reason,
            },
        )

    @staticmethod
    def ledger_saved(path: str, count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_SAVED,
            severity=AuditSeverity.DEBUG,
            description=f"Ledger saved: {count} transactions",
            details={
                "path": path,
                "count": count,
            },
        )

    @staticmethod
    def save_failed(path: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SAVE_FAILED,
            severity=AuditSeverity.ERROR,
            description="Ledger file could not be written",
            error_message=error_message,
            details={"path": path},
        )

    @staticmethod
    def transaction_added(
        amount: str,
        category: str,
        date: str,
        is_credit: bool,
        balance: str,
    ) -> AuditEvent:
        kind = "credit" if is_credit else "debit"
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_ADDED,
            description=f"Transaction added: {kind} of {amount} on {date}",
            details={
                "amount": amount,
                "category": category,
                "date": date,
                "is_credit": is_credit,
                "balance": balance,
            },
        )

    @staticmethod
    def ledger_sorted(key: str, count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_SORTED,
            severity=AuditSeverity.DEBUG,
            description=f"Ledger sorted by {key}",
            details={
                "key": key,
                "count": count,
            },
        )

    @staticmethod
    def search_executed(field: str, value: str, result_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SEARCH_EXECUTED,
            severity=AuditSeverity.DEBUG,
            description=f"Search by {field} returned {result_count} results",
            details={
                "field": field,
                "value": value,
                "result_count": result_count,
            },
        )

    @staticmethod
    def report_generated(month_year: str, result_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.REPORT_GENERATED,
            severity=AuditSeverity.DEBUG,
            description=f"Monthly report for {month_year}: {result_count} transactions",
            details={
                "month_year": month_year,
                "result_count": result_count,
            },
        )

    @staticmethod
    def invalid_input(field: str, value: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.INVALID_INPUT,
            severity=AuditSeverity.DEBUG,
            description=f"Rejected input for {field}",
            details={
                "field": field,
                "value": value,
            },
        )
