"""Data transfer objects for user operations."""

from dataclasses import dataclass
from typing import List

from .account import AccountResponse
from .timestamps import isoformat_utc


@dataclass(frozen=True)
class CreateUserRequest:
    """Input data for signing up a user."""
    name: str
    email: str

    def validate(self) -> List[str]:
        errors = []

        if not self.name or not self.name.strip():
            errors.append("name is required")

        if not self.email or "@" not in self.email:
            errors.append("email must be a valid address")

        return errors


@dataclass(frozen=True)
class UserResponse:
    """Response data for a user."""

    user_id: int
    name: str
    email: str
    account_count: int
    created_at: str

    @classmethod
    def from_entity(cls, user) -> "UserResponse":
        return cls(
            user_id=user.id,
            name=user.name,
            email=user.email,
            account_count=user.account_count,
            created_at=isoformat_utc(user.created_at),
        )


@dataclass(frozen=True)
class UserDetailResponse:
    """A user together with the accounts they own."""

    user: UserResponse
    accounts: List[AccountResponse]

    @classmethod
    def from_entities(cls, user, accounts: list) -> "UserDetailResponse":
        return cls(
            user=UserResponse.from_entity(user),
            accounts=[AccountResponse.from_entity(a) for a in accounts],
        )
