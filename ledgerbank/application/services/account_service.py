"""Account service - handles account opening, retrieval and export."""

from typing import List, Optional

import structlog

from ledgerbank.application.dto import (
    AccountResponse,
    ExportResponse,
    OpenAccountRequest,
    RecordTransactionRequest,
)
from ledgerbank.core.metrics import record_export
from ledgerbank.domain.entities import Account, TransactionType
from ledgerbank.domain.exceptions import (
    AccountNotFoundException,
    InvalidArgumentException,
    UserNotFoundException,
)
from ledgerbank.domain.interfaces import AccountRepository, UserRepository
from ledgerbank.service.ledger import (
    LedgerSettings,
    encode_lines,
    iter_accounts_csv,
    ledger_settings,
)
from .ledger_service import LedgerService

logger = structlog.get_logger(__name__)


class AccountService:
    """
    Application service for account use cases.

    An account's balance only ever moves through the ledger: an opening
    balance is recorded as a credit transaction, and there is no operation
    that writes the balance directly.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        account_repository: AccountRepository,
        ledger_service: LedgerService,
        settings: LedgerSettings = ledger_settings,
    ):
        self._user_repo = user_repository
        self._account_repo = account_repository
        self._ledger = ledger_service
        self._settings = settings

    async def open_account(self, request: OpenAccountRequest) -> AccountResponse:
        """
        Open an account for a user.

        Args:
            request: Owner, name and optional opening balance

        Returns:
            AccountResponse reflecting the opening balance, if any

        Raises:
            InvalidArgumentException: If name is blank or opening balance out of range
            UserNotFoundException: If the user doesn't exist
        """
        errors = request.validate()
        if errors:
            raise InvalidArgumentException("; ".join(errors))

        user = await self._user_repo.get_by_id(request.user_id)
        if user is None:
            raise UserNotFoundException(request.user_id)

        account = Account(name=request.name.strip(), user_id=user.id)
        await self._account_repo.save(account)
        await self._user_repo.increment_account_count(user.id)

        if request.opening_balance_cents > 0:
            entry = await self._ledger.record_transaction(
                RecordTransactionRequest(
                    account_id=account.id,
                    name=self._settings.opening_balance_name,
                    amount_cents=request.opening_balance_cents,
                    type=int(TransactionType.CREDIT),
                )
            )
            account.balance_cents = entry.balance_cents
            account.transaction_count = entry.transaction_count

        logger.info(
            "account_opened",
            account_id=account.id,
            user_id=user.id,
            opening_balance_cents=request.opening_balance_cents,
        )

        return AccountResponse.from_entity(account)

    async def get_account(self, account_id: int) -> AccountResponse:
        """
        Retrieve an account by ID.

        Raises:
            AccountNotFoundException: If the account doesn't exist
        """
        account = await self._account_repo.get_by_id(account_id)

        if account is None:
            logger.warning("account_not_found", account_id=account_id)
            raise AccountNotFoundException(account_id)

        return AccountResponse.from_entity(account)

    async def list_accounts(self, user_id: Optional[int] = None) -> List[AccountResponse]:
        """
        List accounts, optionally for a single user.

        Raises:
            UserNotFoundException: If user_id is given and doesn't exist
        """
        if user_id is not None and await self._user_repo.get_by_id(user_id) is None:
            raise UserNotFoundException(user_id)

        accounts = await self._account_repo.list_all(user_id=user_id)
        return [AccountResponse.from_entity(a) for a in accounts]

    async def export_accounts(self) -> ExportResponse:
        """Serialize every account's id, name, balance and owner as CSV."""
        accounts = await self._account_repo.list_all()

        record_export("accounts")
        logger.info("accounts_exported", rows=len(accounts))

        return ExportResponse(
            filename=self._settings.accounts_export_filename,
            content=encode_lines(iter_accounts_csv(accounts)),
        )
