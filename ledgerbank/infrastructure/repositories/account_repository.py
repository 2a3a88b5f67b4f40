"""SQLAlchemy implementation of AccountRepository."""

from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ledgerbank.domain.entities import Account
from ledgerbank.domain.exceptions import AccountNotFoundException
from ledgerbank.domain.interfaces import AccountRepository
from ledgerbank.infrastructure.database.errors import translate_storage_errors
from ledgerbank.infrastructure.database.models import AccountModel


class SqlAccountRepository(AccountRepository):
    """
    SQL implementation of the Account repository.

    Aggregate changes are issued as relative UPDATE statements
    (balance_cents = balance_cents + :delta) and the row is read back
    afterwards, so a stale in-memory copy can never be written over a newer
    balance.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    @translate_storage_errors
    async def save(self, account: Account) -> Account:
        """Persist a new account with zeroed aggregates."""
        model = AccountModel(
            name=account.name,
            user_id=account.user_id,
            balance_cents=0,
            transaction_count=0,
            created_at=account.created_at,
        )

        self._session.add(model)
        await self._session.flush()

        account.id = model.id
        account.balance_cents = 0
        account.transaction_count = 0
        return account

    @translate_storage_errors
    async def get_by_id(self, account_id: int) -> Optional[Account]:
        """Retrieve an account by ID."""
        model = await self._load(account_id)
        return self._to_entity(model) if model is not None else None

    @translate_storage_errors
    async def get_for_update(self, account_id: int) -> Optional[Account]:
        """Retrieve an account with SELECT ... FOR UPDATE."""
        model = await self._load(account_id, lock=True)
        return self._to_entity(model) if model is not None else None

    @translate_storage_errors
    async def list_all(self, user_id: Optional[int] = None) -> List[Account]:
        """Retrieve accounts ordered by id."""
        stmt = select(AccountModel).order_by(AccountModel.id.asc())
        if user_id is not None:
            stmt = stmt.where(AccountModel.user_id == user_id)

        result = await self._session.execute(stmt)
        models = result.scalars().all()

        return [self._to_entity(model) for model in models]

    @translate_storage_errors
    async def apply_delta(
        self,
        account_id: int,
        balance_delta_cents: int,
        transaction_count_delta: int = 0,
    ) -> Account:
        """Apply a compensating update and return the refreshed account."""
        stmt = (
            update(AccountModel)
            .where(AccountModel.id == account_id)
            .values(
                balance_cents=AccountModel.balance_cents + balance_delta_cents,
                transaction_count=AccountModel.transaction_count + transaction_count_delta,
            )
            .execution_options(synchronize_session=False)
        )
        return await self._update_and_reload(account_id, stmt)

    @translate_storage_errors
    async def set_aggregates(
        self,
        account_id: int,
        balance_cents: int,
        transaction_count: int,
    ) -> Account:
        """Overwrite the cached aggregates with recomputed values."""
        stmt = (
            update(AccountModel)
            .where(AccountModel.id == account_id)
            .values(balance_cents=balance_cents, transaction_count=transaction_count)
            .execution_options(synchronize_session=False)
        )
        return await self._update_and_reload(account_id, stmt)

    async def _update_and_reload(self, account_id: int, stmt) -> Account:
        result = await self._session.execute(stmt)
        if result.rowcount == 0:
            raise AccountNotFoundException(account_id)

        model = await self._load(account_id)
        return self._to_entity(model)

    async def _load(self, account_id: int, lock: bool = False) -> Optional[AccountModel]:
        stmt = (
            select(AccountModel)
            .where(AccountModel.id == account_id)
            .execution_options(populate_existing=True)
        )
        if lock:
            stmt = stmt.with_for_update()

        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _to_entity(self, model: AccountModel) -> Account:
        """Convert database model to domain entity."""
        return Account(
            id=model.id,
            name=model.name,
            user_id=model.user_id,
            balance_cents=model.balance_cents,
            transaction_count=model.transaction_count,
            created_at=model.created_at,
        )
