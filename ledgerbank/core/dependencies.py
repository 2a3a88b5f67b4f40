"""Dependency injection for FastAPI."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ledgerbank.infrastructure.database import get_db_session
from ledgerbank.infrastructure.repositories import (
    SqlAccountRepository,
    SqlTransactionRepository,
    SqlUserRepository,
)
from ledgerbank.application.services import AccountService, LedgerService, UserService


# Repository dependencies
async def get_user_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> SqlUserRepository:
    """Get a UserRepository instance."""
    return SqlUserRepository(session)


async def get_account_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> SqlAccountRepository:
    """Get an AccountRepository instance."""
    return SqlAccountRepository(session)


async def get_transaction_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> SqlTransactionRepository:
    """Get a TransactionRepository instance."""
    return SqlTransactionRepository(session)


# Service dependencies
async def get_ledger_service(
    account_repo: Annotated[SqlAccountRepository, Depends(get_account_repository)],
    transaction_repo: Annotated[SqlTransactionRepository, Depends(get_transaction_repository)],
) -> LedgerService:
    """Get a LedgerService instance."""
    return LedgerService(
        account_repository=account_repo,
        transaction_repository=transaction_repo,
    )


async def get_account_service(
    user_repo: Annotated[SqlUserRepository, Depends(get_user_repository)],
    account_repo: Annotated[SqlAccountRepository, Depends(get_account_repository)],
    ledger_service: Annotated[LedgerService, Depends(get_ledger_service)],
) -> AccountService:
    """Get an AccountService instance with all dependencies."""
    return AccountService(
        user_repository=user_repo,
        account_repository=account_repo,
        ledger_service=ledger_service,
    )


async def get_user_service(
    user_repo: Annotated[SqlUserRepository, Depends(get_user_repository)],
    account_repo: Annotated[SqlAccountRepository, Depends(get_account_repository)],
) -> UserService:
    """Get a UserService instance."""
    return UserService(user_repository=user_repo, account_repository=account_repo)
