"""SQLAlchemy implementation of TransactionRepository."""

from typing import List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ledgerbank.domain.entities import Transaction, TransactionType
from ledgerbank.domain.exceptions import TransactionNotFoundException
from ledgerbank.domain.interfaces import TransactionRepository
from ledgerbank.infrastructure.database.errors import translate_storage_errors
from ledgerbank.infrastructure.database.models import AccountModel, TransactionModel


class SqlTransactionRepository(TransactionRepository):
    """SQL-backed ledger transaction repository."""

    def __init__(self, session: AsyncSession):
        self._session = session

    @translate_storage_errors
    async def save(self, transaction: Transaction) -> Transaction:
        model = TransactionModel(
            name=transaction.name,
            amount_cents=transaction.amount_cents,
            type=int(transaction.type),
            account_id=transaction.account_id,
            created_at=transaction.created_at,
        )

        self._session.add(model)
        await self._session.flush()

        transaction.id = model.id
        return transaction

    @translate_storage_errors
    async def get_by_id(self, transaction_id: int) -> Optional[Transaction]:
        model = await self._load(transaction_id)
        return self._to_entity(model) if model is not None else None

    @translate_storage_errors
    async def get_for_update(self, transaction_id: int) -> Optional[Transaction]:
        model = await self._load(transaction_id, lock=True)
        return self._to_entity(model) if model is not None else None

    @translate_storage_errors
    async def update(self, transaction: Transaction) -> Transaction:
        model = await self._load(transaction.id)
        if model is None:
            raise TransactionNotFoundException(transaction.id)

        model.name = transaction.name
        model.amount_cents = transaction.amount_cents
        model.type = int(transaction.type)

        await self._session.flush()

        return transaction

    @translate_storage_errors
    async def delete(self, transaction_id: int) -> None:
        model = await self._load(transaction_id)
        if model is None:
            raise TransactionNotFoundException(transaction_id)

        await self._session.delete(model)
        await self._session.flush()

    @translate_storage_errors
    async def list_by_account(
        self,
        account_id: int,
        types: Optional[Sequence[TransactionType]] = None,
    ) -> List[Transaction]:
        stmt = (
            select(TransactionModel, AccountModel.user_id)
            .join(AccountModel, AccountModel.id == TransactionModel.account_id)
            .where(TransactionModel.account_id == account_id)
            .order_by(TransactionModel.created_at.asc(), TransactionModel.id.asc())
        )
        if types is not None:
            stmt = stmt.where(TransactionModel.type.in_([int(t) for t in types]))

        result = await self._session.execute(stmt)

        return [self._to_entity(model, user_id) for model, user_id in result.all()]

    async def _load(self, transaction_id: int, lock: bool = False) -> Optional[TransactionModel]:
        stmt = (
            select(TransactionModel)
            .where(TransactionModel.id == transaction_id)
            .execution_options(populate_existing=True)
        )
        if lock:
            stmt = stmt.with_for_update()

        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _to_entity(self, model: TransactionModel, user_id: Optional[int] = None) -> Transaction:
        return Transaction(
            id=model.id,
            name=model.name,
            amount_cents=model.amount_cents,
            type=TransactionType(model.type),
            account_id=model.account_id,
            user_id=user_id,
            created_at=model.created_at,
        )
