"""Account entity holding a cached ledger balance."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass
class Account:
    """
    A bank account owned by a user.

    balance_cents and transaction_count are denormalized aggregates of the
    account's transactions. They are only ever changed by ledger operations.
    """

    name: str
    user_id: int
    id: Optional[int] = None
    balance_cents: int = 0
    transaction_count: int = 0
    created_at: datetime = field(default_factory=datetime.utcnow)
