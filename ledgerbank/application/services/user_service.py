"""User service - handles signup and user retrieval use cases."""

from typing import List

import structlog

from ledgerbank.application.dto import CreateUserRequest, UserDetailResponse, UserResponse
from ledgerbank.domain.entities import User
from ledgerbank.domain.exceptions import InvalidArgumentException, UserNotFoundException
from ledgerbank.domain.interfaces import AccountRepository, UserRepository

logger = structlog.get_logger(__name__)


class UserService:
    """Application service for user use cases."""

    def __init__(
        self,
        user_repository: UserRepository,
        account_repository: AccountRepository,
    ):
        self._user_repo = user_repository
        self._account_repo = account_repository

    async def create_user(self, request: CreateUserRequest) -> UserResponse:
        """
        Sign up a new user with no accounts.

        Raises:
            InvalidArgumentException: If name or email is invalid
        """
        errors = request.validate()
        if errors:
            raise InvalidArgumentException("; ".join(errors))

        user = User(name=request.name.strip(), email=request.email.strip())
        await self._user_repo.save(user)

        logger.info("user_created", user_id=user.id)

        return UserResponse.from_entity(user)

    async def list_users(self) -> List[UserResponse]:
        users = await self._user_repo.list_all()
        return [UserResponse.from_entity(user) for user in users]

    async def get_user(self, user_id: int) -> UserDetailResponse:
        """
        Retrieve a user with their accounts.

        Raises:
            UserNotFoundException: If the user doesn't exist
        """
        user = await self._user_repo.get_by_id(user_id)

        if user is None:
            logger.warning("user_not_found", user_id=user_id)
            raise UserNotFoundException(user_id)

        accounts = await self._account_repo.list_all(user_id=user_id)

        return UserDetailResponse.from_entities(user, accounts)
