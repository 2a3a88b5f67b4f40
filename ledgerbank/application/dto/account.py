"""Data transfer objects for account operations."""

from dataclasses import dataclass
from typing import List

from ledgerbank.service.ledger import MAX_AMOUNT_CENTS

from .timestamps import isoformat_utc


@dataclass(frozen=True)
class OpenAccountRequest:
    """Input data for opening an account."""
    user_id: int
    name: str
    opening_balance_cents: int = 0

    def validate(self) -> List[str]:
        errors = []

        if not self.name or not self.name.strip():
            errors.append("name is required")

        if self.opening_balance_cents < 0:
            errors.append("opening_balance_cents must be non-negative")
        elif self.opening_balance_cents > MAX_AMOUNT_CENTS:
            errors.append(
                f"opening_balance_cents must not exceed {MAX_AMOUNT_CENTS}"
            )

        return errors


@dataclass(frozen=True)
class AccountResponse:
    """Response data for an account."""

    account_id: int
    name: str
    user_id: int
    balance_cents: int
    transaction_count: int
    created_at: str

    @classmethod
    def from_entity(cls, account) -> "AccountResponse":
        return cls(
            account_id=account.id,
            name=account.name,
            user_id=account.user_id,
            balance_cents=account.balance_cents,
            transaction_count=account.transaction_count,
            created_at=isoformat_utc(account.created_at),
        )
