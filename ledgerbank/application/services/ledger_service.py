"""Ledger service - keeps account balances consistent with their transactions."""

from dataclasses import replace
from typing import List

import structlog

from ledgerbank.application.dto import (
    AmendTransactionRequest,
    BudgetResponse,
    ExportResponse,
    LedgerEntryResponse,
    ReconciliationResponse,
    RecordTransactionRequest,
    TransactionResponse,
)
from ledgerbank.core.metrics import (
    record_balance_drift,
    record_budget_query,
    record_export,
    track_ledger_operation,
)
from ledgerbank.domain.entities import Account, BalanceReport, Transaction, TransactionType
from ledgerbank.domain.exceptions import (
    AccountNotFoundException,
    InvalidArgumentException,
    TransactionNotFoundException,
)
from ledgerbank.domain.interfaces import AccountRepository, TransactionRepository
from ledgerbank.service.ledger import (
    LedgerSettings,
    compensating_delta,
    compute_balance,
    encode_lines,
    format_transaction_name,
    iter_transactions_csv,
    ledger_settings,
    parse_transaction_type,
    select_within_budget,
    signed_delta,
    strip_type_prefix,
    validate_budget,
)

logger = structlog.get_logger(__name__)


class LedgerService:
    """
    Application service for ledger use cases.

    Every mutation locks the owning account row before it changes the
    transaction row, then applies exactly one compensating update to the
    account's cached balance and transaction count. Both writes go through
    the same session, so they are committed or rolled back together.
    """

    def __init__(
        self,
        account_repository: AccountRepository,
        transaction_repository: TransactionRepository,
        settings: LedgerSettings = ledger_settings,
    ):
        self._account_repo = account_repository
        self._transaction_repo = transaction_repository
        self._settings = settings

    async def record_transaction(self, request: RecordTransactionRequest) -> LedgerEntryResponse:
        """
        Record a new transaction and apply its effect to the account balance.

        Args:
            request: Account, name, amount and type of the transaction

        Returns:
            LedgerEntryResponse with the new transaction and updated balance

        Raises:
            InvalidArgumentException: If amount is negative or type unknown
            AccountNotFoundException: If the account doesn't exist
        """
        with track_ledger_operation("record"):
            errors = request.validate()
            if errors:
                raise InvalidArgumentException("; ".join(errors))

            txn_type = parse_transaction_type(request.type)
            account = await self._lock_account(request.account_id)

            transaction = Transaction(
                name=format_transaction_name(request.name, txn_type),
                amount_cents=request.amount_cents,
                type=txn_type,
                account_id=account.id,
                user_id=account.user_id,
            )
            await self._transaction_repo.save(transaction)

            delta = signed_delta(transaction.amount_cents, txn_type)
            account = await self._account_repo.apply_delta(account.id, delta, 1)

        logger.info(
            "transaction_recorded",
            transaction_id=transaction.id,
            account_id=account.id,
            type=txn_type.name.lower(),
            amount_cents=transaction.amount_cents,
            balance_cents=account.balance_cents,
        )

        return LedgerEntryResponse.from_entities(transaction, account)

    async def amend_transaction(self, request: AmendTransactionRequest) -> LedgerEntryResponse:
        """
        Change the amount, type and optionally the name of a transaction.

        The old contribution is reversed and the new one applied in a single
        compensating update: balance_new = balance_old - old_delta + new_delta.

        Raises:
            InvalidArgumentException: If amount is negative or type unknown
            TransactionNotFoundException: If the transaction doesn't exist
        """
        with track_ledger_operation("amend"):
            errors = request.validate()
            if errors:
                raise InvalidArgumentException("; ".join(errors))

            new_type = parse_transaction_type(request.type)
            transaction = await self._lock_transaction(request.transaction_id)
            account = await self._lock_account(transaction.account_id)

            old_amount, old_type = transaction.amount_cents, transaction.type
            base_name = request.name if request.name is not None else strip_type_prefix(transaction.name)

            transaction.name = format_transaction_name(base_name, new_type)
            transaction.amount_cents = request.amount_cents
            transaction.type = new_type
            transaction.user_id = account.user_id
            await self._transaction_repo.update(transaction)

            delta = compensating_delta(old_amount, old_type, request.amount_cents, new_type)
            account = await self._account_repo.apply_delta(account.id, delta)

        logger.info(
            "transaction_amended",
            transaction_id=transaction.id,
            account_id=account.id,
            old_amount_cents=old_amount,
            new_amount_cents=transaction.amount_cents,
            old_type=old_type.name.lower(),
            new_type=new_type.name.lower(),
            balance_cents=account.balance_cents,
        )

        return LedgerEntryResponse.from_entities(transaction, account)

    async def delete_transaction(self, transaction_id: int) -> LedgerEntryResponse:
        """
        Reverse a transaction's contribution and remove it.

        Returns:
            LedgerEntryResponse with the removed transaction and the balance
            after its reversal

        Raises:
            TransactionNotFoundException: If the transaction doesn't exist
        """
        with track_ledger_operation("delete"):
            transaction = await self._lock_transaction(transaction_id)
            account = await self._lock_account(transaction.account_id)

            delta = -signed_delta(transaction.amount_cents, transaction.type)
            account = await self._account_repo.apply_delta(account.id, delta, -1)
            await self._transaction_repo.delete(transaction.id)

        logger.info(
            "transaction_deleted",
            transaction_id=transaction.id,
            account_id=account.id,
            amount_cents=transaction.amount_cents,
            balance_cents=account.balance_cents,
        )

        return LedgerEntryResponse.from_entities(transaction, account)

    async def get_transaction(self, transaction_id: int) -> TransactionResponse:
        """
        Retrieve a single transaction.

        Raises:
            TransactionNotFoundException: If the transaction doesn't exist
        """
        transaction = await self._transaction_repo.get_by_id(transaction_id)
        if transaction is None:
            raise TransactionNotFoundException(transaction_id)
        return TransactionResponse.from_entity(transaction)

    async def list_transactions(self, account_id: int) -> List[TransactionResponse]:
        """
        List an account's transactions in ledger order.

        Raises:
            AccountNotFoundException: If the account doesn't exist
        """
        await self._get_account(account_id)
        transactions = await self._transaction_repo.list_by_account(account_id)
        return [TransactionResponse.from_entity(t) for t in transactions]

    async def verify_balance(self, account_id: int) -> ReconciliationResponse:
        """
        Compare the cached aggregates with the ledger without changing them.

        Raises:
            AccountNotFoundException: If the account doesn't exist
        """
        account = await self._get_account(account_id)
        report = await self._build_report(account)

        if not report.in_sync:
            logger.warning(
                "balance_drift_detected",
                account_id=account_id,
                stored_balance_cents=report.stored_balance_cents,
                computed_balance_cents=report.computed_balance_cents,
                drift_cents=report.drift_cents,
            )

        return ReconciliationResponse.from_report(report)

    async def recompute_balance(self, account_id: int) -> ReconciliationResponse:
        """
        Recalculate the balance and transaction count from the ledger and
        store them.

        Calling this again without an intervening mutation reports the same
        computed values and changes nothing.

        Raises:
            AccountNotFoundException: If the account doesn't exist
        """
        with track_ledger_operation("recompute"):
            account = await self._lock_account(account_id)
            report = await self._build_report(account)

            if not report.in_sync:
                record_balance_drift()
                logger.warning(
                    "balance_drift_detected",
                    account_id=account_id,
                    stored_balance_cents=report.stored_balance_cents,
                    computed_balance_cents=report.computed_balance_cents,
                    drift_cents=report.drift_cents,
                )
                await self._account_repo.set_aggregates(
                    account_id,
                    report.computed_balance_cents,
                    report.computed_transaction_count,
                )
                report = replace(report, repaired=True)

        logger.info(
            "balance_recomputed",
            account_id=account_id,
            balance_cents=report.computed_balance_cents,
            repaired=report.repaired,
        )

        return ReconciliationResponse.from_report(report)

    async def transactions_within_budget(
        self,
        account_id: int,
        budget_cents: int,
    ) -> BudgetResponse:
        """
        Return the longest ledger-ordered prefix of spending within a budget.

        Raises:
            InvalidArgumentException: If the budget is negative
            AccountNotFoundException: If the account doesn't exist
        """
        validate_budget(budget_cents)
        await self._get_account(account_id)

        types = None if self._settings.budget_credits_replenish else [TransactionType.DEBIT]
        transactions = await self._transaction_repo.list_by_account(account_id, types=types)
        selected = select_within_budget(transactions, budget_cents, self._settings)

        record_budget_query()
        total_cents = -compute_balance(selected)

        logger.info(
            "budget_queried",
            account_id=account_id,
            budget_cents=budget_cents,
            selected=len(selected),
            total_cents=total_cents,
        )

        return BudgetResponse(
            account_id=account_id,
            budget_cents=budget_cents,
            total_cents=total_cents,
            transactions=[TransactionResponse.from_entity(t) for t in selected],
        )

    async def export_transactions(self, account_id: int) -> ExportResponse:
        """
        Serialize an account's ledger as CSV.

        Raises:
            AccountNotFoundException: If the account doesn't exist
        """
        await self._get_account(account_id)
        transactions = await self._transaction_repo.list_by_account(account_id)

        record_export("transactions")
        logger.info("ledger_exported", account_id=account_id, rows=len(transactions))

        return ExportResponse(
            filename=self._settings.transactions_export_filename.format(account_id=account_id),
            content=encode_lines(iter_transactions_csv(transactions)),
        )

    async def _get_account(self, account_id: int) -> Account:
        account = await self._account_repo.get_by_id(account_id)
        if account is None:
            raise AccountNotFoundException(account_id)
        return account

    async def _lock_account(self, account_id: int) -> Account:
        account = await self._account_repo.get_for_update(account_id)
        if account is None:
            raise AccountNotFoundException(account_id)
        return account

    async def _lock_transaction(self, transaction_id: int) -> Transaction:
        transaction = await self._transaction_repo.get_for_update(transaction_id)
        if transaction is None:
            raise TransactionNotFoundException(transaction_id)
        return transaction

    async def _build_report(self, account: Account) -> BalanceReport:
        transactions = await self._transaction_repo.list_by_account(account.id)
        return BalanceReport(
            account_id=account.id,
            stored_balance_cents=account.balance_cents,
            computed_balance_cents=compute_balance(transactions),
            stored_transaction_count=account.transaction_count,
            computed_transaction_count=len(transactions),
        )
