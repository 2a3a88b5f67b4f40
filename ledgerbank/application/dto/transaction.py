"""Data transfer objects for ledger transaction operations."""

from dataclasses import dataclass
from typing import List, Optional

from ledgerbank.service.ledger import MAX_AMOUNT_CENTS

from .timestamps import isoformat_utc


def _validate_amount_and_type(amount_cents, txn_type) -> List[str]:
    errors = []

    if isinstance(amount_cents, bool) or not isinstance(amount_cents, int):
        errors.append("amount_cents must be an integer")
    elif amount_cents < 0:
        errors.append("amount_cents must be non-negative")
    elif amount_cents > MAX_AMOUNT_CENTS:
        errors.append(f"amount_cents must not exceed {MAX_AMOUNT_CENTS}")

    if isinstance(txn_type, bool) or txn_type not in (0, 1):
        errors.append("type must be 0 (debit) or 1 (credit)")

    return errors


@dataclass(frozen=True)
class RecordTransactionRequest:
    """Input data for recording a transaction on an account."""
    account_id: int
    name: str
    amount_cents: int
    type: int

    def validate(self) -> List[str]:
        errors = []

        if not self.name or not self.name.strip():
            errors.append("name is required")

        errors.extend(_validate_amount_and_type(self.amount_cents, self.type))

        return errors


@dataclass(frozen=True)
class AmendTransactionRequest:
    """Input data for amending an existing transaction."""
    transaction_id: int
    amount_cents: int
    type: int
    name: Optional[str] = None

    def validate(self) -> List[str]:
        errors = _validate_amount_and_type(self.amount_cents, self.type)

        if self.name is not None and not self.name.strip():
            errors.append("name cannot be blank")

        return errors


@dataclass(frozen=True)
class TransactionResponse:
    """Response data for a single transaction."""

    transaction_id: int
    name: str
    amount_cents: int
    type: int
    account_id: int
    created_at: str

    @classmethod
    def from_entity(cls, transaction) -> "TransactionResponse":
        return cls(
            transaction_id=transaction.id,
            name=transaction.name,
            amount_cents=transaction.amount_cents,
            type=int(transaction.type),
            account_id=transaction.account_id,
            created_at=isoformat_utc(transaction.created_at),
        )


@dataclass(frozen=True)
class LedgerEntryResponse:
    """
    Result of a ledger mutation: the affected transaction and the owning
    account's aggregates after the compensating update.
    """

    transaction: TransactionResponse
    account_id: int
    balance_cents: int
    transaction_count: int

    @classmethod
    def from_entities(cls, transaction, account) -> "LedgerEntryResponse":
        return cls(
            transaction=TransactionResponse.from_entity(transaction),
            account_id=account.id,
            balance_cents=account.balance_cents,
            transaction_count=account.transaction_count,
        )
