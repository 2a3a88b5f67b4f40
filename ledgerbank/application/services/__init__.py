"""Application services (use cases)."""

from .ledger_service import LedgerService
from .account_service import AccountService
from .user_service import UserService

__all__ = [
    "LedgerService",
    "AccountService",
    "UserService",
]
