"""Storage-related domain exceptions."""

from .base import DomainException


class LedgerConflictException(DomainException):
    """
    Raised when the database aborts a unit of work because of a concurrent
    update (serialization failure or deadlock). The operation can be retried.
    """

    def __init__(self, message: str = "Concurrent update on the same account"):
        super().__init__(
            message=message,
            code="LEDGER_CONFLICT",
        )


class StorageUnavailableException(DomainException):
    """Raised when the database cannot be reached or does not answer in time."""

    def __init__(self, message: str = "Storage is unavailable"):
        super().__init__(
            message=message,
            code="STORAGE_UNAVAILABLE",
        )
