"""Query execution and report rendering package."""

from ledger.queries.executor import MONTH_FORMAT_ERROR, QueryExecutor

__all__ = ["MONTH_FORMAT_ERROR", "QueryExecutor"]
