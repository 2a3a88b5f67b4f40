"""Domain Exceptions - Business rule violations and domain errors."""

from .base import DomainException, NotFoundException, InvalidArgumentException
from .user import UserNotFoundException
from .account import AccountNotFoundException
from .transaction import TransactionNotFoundException
from .storage import LedgerConflictException, StorageUnavailableException

__all__ = [
    "DomainException",
    "NotFoundException",
    "InvalidArgumentException",
    "UserNotFoundException",
    "AccountNotFoundException",
    "TransactionNotFoundException",
    "LedgerConflictException",
    "StorageUnavailableException",
]
