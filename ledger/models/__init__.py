"""
Data Models Package

This package contains all Pydantic models used by the ledger.
"""

from ledger.models.transaction import (
    CENT,
    LoadResult,
    MonthlySummary,
    QueryResult,
    SearchField,
    SkippedRecord,
    SortKey,
    Transaction,
    quantize_amount,
)
from ledger.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Ledger models
    "CENT",
    "LoadResult",
    "MonthlySummary",
    "QueryResult",
    "SearchField",
    "SkippedRecord",
    "SortKey",
    "Transaction",
    "quantize_amount",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
