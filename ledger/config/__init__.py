"""Configuration package."""

from ledger.config.settings import (
    DurabilityPolicy,
    LedgerSettings,
    MalformedLinePolicy,
    get_settings,
)

__all__ = [
    "DurabilityPolicy",
    "LedgerSettings",
    "MalformedLinePolicy",
    "get_settings",
]
