"""User entity representing a bank customer."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass
class User:
    """
    A customer who owns accounts.

    account_count is a denormalized count of the accounts the user owns.
    """

    name: str
    email: str
    id: Optional[int] = None
    account_count: int = 0
    created_at: datetime = field(default_factory=datetime.utcnow)
