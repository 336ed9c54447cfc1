"""
Configuration Management for the Expense Ledger

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Nothing in the store or the codec reads the environment directly;
they receive paths and thresholds from these settings.
"""

from decimal import Decimal
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LedgerSettings(BaseSettings):
    """
    Main ledger settings.

    Loads configuration from LEDGER_* environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="LEDGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Durable storage
    data_file: str = Field(
        default="expenses.csv",
        min_length=1,
        description="CSV file the ledger is loaded from and saved to"
    )
    file_encoding: str = Field(
        default="utf-8",
        description="Text encoding of the data file"
    )

    # Reports
    trend_months: int = Field(
        default=6,
        ge=1,
        le=120,
        description="Number of months in the default spending trend"
    )

    # Validation thresholds
    max_expense_amount: Decimal = Field(
        default=Decimal("1000000"),
        gt=0,
        description="Amounts above this are flagged for review (not rejected)"
    )
    future_date_tolerance_days: int = Field(
        default=7,
        ge=0,
        description="How many days in the future an expense date can be before it is flagged"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Minimum level for audit log output"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Only accept stdlib logging level names."""
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unsupported log level: {v}")
        return level


@lru_cache()
def get_settings() -> LedgerSettings:
    """
    Get ledger settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return LedgerSettings()
