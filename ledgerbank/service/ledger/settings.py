"""
Ledger Settings for the Ledgerbank service.

Environment variables use the LEDGER_ prefix:
    LEDGER_BUDGET_CREDITS_REPLENISH=true
    LEDGER_OPENING_BALANCE_NAME="OPENING BALANCE"

Usage:
    from ledgerbank.service.ledger.settings import ledger_settings

    # Or create custom settings for testing
    custom = LedgerSettings(budget_credits_replenish=True)
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LedgerSettings(BaseSettings):
    """
    Configurable ledger policies.

    All settings can be overridden via environment variables with LEDGER_ prefix.
    """

    model_config = SettingsConfigDict(
        env_prefix="LEDGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Budget Query ===
    budget_credits_replenish: bool = Field(
        default=False,
        description=(
            "When true, credits take part in budget queries and lower the "
            "running total. When false only debits are accumulated."
        ),
    )

    # === Account Opening ===
    opening_balance_name: str = Field(
        default="OPENING BALANCE",
        min_length=1,
        description="Name of the credit recorded for an account's opening balance",
    )

    # === Export ===
    transactions_export_filename: str = Field(
        default="account_{account_id}_transactions.csv",
        description="Download filename for an account's ledger export",
    )
    accounts_export_filename: str = Field(
        default="accounts.csv",
        description="Download filename for the accounts export",
    )

    # === Conflicts ===
    conflict_retry_after_seconds: int = Field(
        default=1,
        ge=0,
        description="Retry-After hint sent with 409 responses",
    )


@lru_cache
def get_ledger_settings() -> LedgerSettings:
    """Get cached ledger settings instance."""
    return LedgerSettings()


ledger_settings = get_ledger_settings()
