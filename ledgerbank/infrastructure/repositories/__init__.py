"""Repository implementations."""

from .user_repository import SqlUserRepository
from .account_repository import SqlAccountRepository
from .transaction_repository import SqlTransactionRepository

__all__ = [
    "SqlUserRepository",
    "SqlAccountRepository",
    "SqlTransactionRepository",
]
