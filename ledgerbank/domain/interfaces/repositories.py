"""Repository interfaces for data persistence."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from ledgerbank.domain.entities import Account, Transaction, TransactionType, User


class UserRepository(ABC):
    """
    Abstract repository for User persistence.

    Implementations may use PostgreSQL, SQLite, in-memory storage, etc.
    """

    @abstractmethod
    async def save(self, user: User) -> User:
        """
        Persist a new user.

        Args:
            user: The user to save

        Returns:
            The saved user with its generated id populated
        """
        ...

    @abstractmethod
    async def get_by_id(self, user_id: int) -> Optional[User]:
        """
        Retrieve a user by ID.

        Returns:
            The user if found, None otherwise
        """
        ...

    @abstractmethod
    async def list_all(self) -> List[User]:
        """Retrieve all users, ordered by id."""
        ...

    @abstractmethod
    async def increment_account_count(self, user_id: int, by: int = 1) -> None:
        """
        Atomically adjust the user's denormalized account count.

        Args:
            user_id: The owning user
            by: Signed adjustment
        """
        ...


class AccountRepository(ABC):
    """
    Abstract repository for Account persistence.

    The balance and transaction count columns are only written through
    apply_delta and set_aggregates, never through save.
    """

    @abstractmethod
    async def save(self, account: Account) -> Account:
        """
        Persist a new account.

        Returns:
            The saved account with its generated id populated
        """
        ...

    @abstractmethod
    async def get_by_id(self, account_id: int) -> Optional[Account]:
        """
        Retrieve an account by ID without locking it.

        Returns:
            The account if found, None otherwise
        """
        ...

    @abstractmethod
    async def get_for_update(self, account_id: int) -> Optional[Account]:
        """
        Retrieve an account and lock its row until the unit of work ends.

        Concurrent ledger operations on the same account serialize on this
        lock.

        Returns:
            The account if found, None otherwise
        """
        ...

    @abstractmethod
    async def list_all(self, user_id: Optional[int] = None) -> List[Account]:
        """
        Retrieve accounts, optionally restricted to one user, ordered by id.
        """
        ...

    @abstractmethod
    async def apply_delta(
        self,
        account_id: int,
        balance_delta_cents: int,
        transaction_count_delta: int = 0,
    ) -> Account:
        """
        Apply a compensating update to the account's cached aggregates.

        The change is applied as a single relative update so that it cannot
        overwrite a concurrent change with a stale value.

        Returns:
            The account with its updated aggregates
        """
        ...

    @abstractmethod
    async def set_aggregates(
        self,
        account_id: int,
        balance_cents: int,
        transaction_count: int,
    ) -> Account:
        """
        Overwrite the cached aggregates with recomputed values.

        Only reconciliation uses this.
        """
        ...


class TransactionRepository(ABC):
    """Abstract repository for ledger Transaction persistence."""

    @abstractmethod
    async def save(self, transaction: Transaction) -> Transaction:
        """
        Persist a new transaction.

        Returns:
            The saved transaction with its generated id populated
        """
        ...

    @abstractmethod
    async def get_by_id(self, transaction_id: int) -> Optional[Transaction]:
        """
        Retrieve a transaction by ID.

        Returns:
            The transaction if found, None otherwise
        """
        ...

    @abstractmethod
    async def get_for_update(self, transaction_id: int) -> Optional[Transaction]:
        """Retrieve a transaction and lock its row until the unit of work ends."""
        ...

    @abstractmethod
    async def update(self, transaction: Transaction) -> Transaction:
        """Persist the name, amount and type of an existing transaction."""
        ...

    @abstractmethod
    async def delete(self, transaction_id: int) -> None:
        """Remove a transaction row."""
        ...

    @abstractmethod
    async def list_by_account(
        self,
        account_id: int,
        types: Optional[Sequence[TransactionType]] = None,
    ) -> List[Transaction]:
        """
        Retrieve an account's transactions in ledger order.

        Args:
            account_id: The owning account
            types: Restrict to these transaction types (all when None)

        Returns:
            Transactions ordered by created_at then id, ascending, with
            user_id populated from the owning account
        """
        ...
