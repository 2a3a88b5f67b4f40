"""SQLAlchemy implementation of UserRepository."""

from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ledgerbank.domain.entities import User
from ledgerbank.domain.exceptions import UserNotFoundException
from ledgerbank.domain.interfaces import UserRepository
from ledgerbank.infrastructure.database.errors import translate_storage_errors
from ledgerbank.infrastructure.database.models import UserModel


class SqlUserRepository(UserRepository):
    """
    SQL implementation of the User repository.

    Uses SQLAlchemy async session for database operations.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    @translate_storage_errors
    async def save(self, user: User) -> User:
        """Persist a user to the database."""
        model = UserModel(
            name=user.name,
            email=user.email,
            account_count=user.account_count,
            created_at=user.created_at,
        )

        self._session.add(model)
        await self._session.flush()

        user.id = model.id
        return user

    @translate_storage_errors
    async def get_by_id(self, user_id: int) -> Optional[User]:
        """Retrieve a user by ID."""
        stmt = (
            select(UserModel)
            .where(UserModel.id == user_id)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._to_entity(model)

    @translate_storage_errors
    async def list_all(self) -> List[User]:
        """Retrieve all users ordered by id."""
        stmt = select(UserModel).order_by(UserModel.id.asc())
        result = await self._session.execute(stmt)
        models = result.scalars().all()

        return [self._to_entity(model) for model in models]

    @translate_storage_errors
    async def increment_account_count(self, user_id: int, by: int = 1) -> None:
        """Adjust the denormalized account count in a single relative update."""
        stmt = (
            update(UserModel)
            .where(UserModel.id == user_id)
            .values(account_count=UserModel.account_count + by)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)

        if result.rowcount == 0:
            raise UserNotFoundException(user_id)

    def _to_entity(self, model: UserModel) -> User:
        """Convert database model to domain entity."""
        return User(
            id=model.id,
            name=model.name,
            email=model.email,
            account_count=model.account_count,
            created_at=model.created_at,
        )
