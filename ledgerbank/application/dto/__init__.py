"""Data Transfer Objects for application layer."""

from .account import AccountResponse, OpenAccountRequest
from .ledger import BudgetResponse, ExportResponse, ReconciliationResponse
from .transaction import (
    AmendTransactionRequest,
    LedgerEntryResponse,
    RecordTransactionRequest,
    TransactionResponse,
)
from .user import CreateUserRequest, UserDetailResponse, UserResponse

__all__ = [
    "AccountResponse",
    "OpenAccountRequest",
    "BudgetResponse",
    "ExportResponse",
    "ReconciliationResponse",
    "AmendTransactionRequest",
    "LedgerEntryResponse",
    "RecordTransactionRequest",
    "TransactionResponse",
    "CreateUserRequest",
    "UserDetailResponse",
    "UserResponse",
]
