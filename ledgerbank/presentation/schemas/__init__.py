"""Pydantic schemas for API request/response validation."""

from .account import AccountSchema, OpenAccountSchema
from .error import ErrorResponseSchema
from .ledger import BudgetResponseSchema, ReconciliationSchema
from .transaction import (
    AmendTransactionSchema,
    LedgerEntrySchema,
    RecordTransactionSchema,
    TransactionSchema,
)
from .user import CreateUserSchema, UserDetailSchema, UserSchema

__all__ = [
    "AccountSchema",
    "OpenAccountSchema",
    "ErrorResponseSchema",
    "BudgetResponseSchema",
    "ReconciliationSchema",
    "AmendTransactionSchema",
    "LedgerEntrySchema",
    "RecordTransactionSchema",
    "TransactionSchema",
    "CreateUserSchema",
    "UserDetailSchema",
    "UserSchema",
]
