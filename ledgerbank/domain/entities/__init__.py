"""Domain Entities - Core business objects."""

from .user import User
from .account import Account
from .transaction import Transaction, TransactionType
from .reconciliation import BalanceReport

__all__ = [
    "User",
    "Account",
    "Transaction",
    "TransactionType",
    "BalanceReport",
]
