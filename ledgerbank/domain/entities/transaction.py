"""Transaction entity representing a ledger entry."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from typing import Optional


class TransactionType(IntEnum):
    """Direction of a ledger transaction."""

    DEBIT = 0  # Money out
    CREDIT = 1  # Money in


@dataclass
class Transaction:
    """
    A single ledger entry on an account.

    Attributes:
        name: Display name, formatted as T<type>-<UPPERCASE NAME>
        amount_cents: Non-negative magnitude of the transaction
        type: Direction; the sign of the balance effect comes from here
        account_id: Owning account
        user_id: Owner of the account, when loaded alongside it
    """

    name: str
    amount_cents: int
    type: TransactionType
    account_id: int
    id: Optional[int] = None
    user_id: Optional[int] = None
    created_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def is_debit(self) -> bool:
        return self.type == TransactionType.DEBIT
