"""
Domain Interfaces (Ports)
"""

from .repositories import AccountRepository, TransactionRepository, UserRepository

__all__ = [
    "AccountRepository",
    "TransactionRepository",
    "UserRepository",
]
