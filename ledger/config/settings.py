"""
Configuration Management for Personal Ledger

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
The ledger has no command-line flags; everything that can be tuned
(file location, durability, malformed-line policy, logging) is read
from LEDGER_* environment variables or a local .env file.
"""

from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DurabilityPolicy(str, Enum):
    """
    When the ledger is written to disk.

    WRITE_THROUGH rewrites the whole file after every added transaction.
    ON_EXIT keeps changes in memory until an explicit flush (menu exit).
    """
    WRITE_THROUGH = "write_through"
    ON_EXIT = "on_exit"


class MalformedLinePolicy(str, Enum):
    """What to do with a persistence line that cannot be parsed."""
    SKIP = "skip"  # Drop the line, report it, keep loading
    FAIL = "fail"  # Abort the load


class LedgerSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="LEDGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Persistence
    data_file: Path = Field(
        default=Path("transactions.csv"),
        description="Path to the flat-file ledger"
    )
    durability: DurabilityPolicy = Field(
        default=DurabilityPolicy.WRITE_THROUGH,
        description="When changes are written to the ledger file"
    )
    malformed_lines: MalformedLinePolicy = Field(
        default=MalformedLinePolicy.SKIP,
        description="How unreadable ledger lines are handled on load"
    )
    save_retry_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Attempts for a ledger write before giving up"
    )

    # Validation
    strict_calendar: bool = Field(
        default=False,
        description="Check real month lengths when validating dates"
    )

    # Logging
    log_level: str = Field(
        default="WARNING",
        description="Log level name (DEBUG, INFO, WARNING, ERROR)"
    )
    log_file: Optional[Path] = Field(
        default=None,
        description="Log destination; stderr when unset"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Only accept standard level names."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        level = v.strip().upper()
        if level not in allowed:
            raise ValueError(f"Unsupported log level: {v}. Allowed: {sorted(allowed)}")
        return level

    @field_validator('data_file')
    @classmethod
    def validate_data_file(cls, v: Path) -> Path:
        """The ledger file must not be a directory."""
        if v.is_dir():
            raise ValueError(f"Ledger path is a directory: {v}")
        return v


@lru_cache()
def get_settings() -> LedgerSettings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return LedgerSettings()
