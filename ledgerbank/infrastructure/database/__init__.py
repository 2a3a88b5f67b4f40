"""Database infrastructure."""

from .connection import get_db_session, DatabaseSessionManager, db_manager
from .errors import translate_db_error, translate_storage_errors
from .models import Base, UserModel, AccountModel, TransactionModel

__all__ = [
    "get_db_session",
    "DatabaseSessionManager",
    "db_manager",
    "translate_db_error",
    "translate_storage_errors",
    "Base",
    "UserModel",
    "AccountModel",
    "TransactionModel",
]
