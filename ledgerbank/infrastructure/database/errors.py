"""Translation of database driver errors into domain exceptions."""

from functools import wraps

import structlog
from sqlalchemy.exc import DBAPIError, OperationalError, TimeoutError as PoolTimeoutError

from ledgerbank.domain.exceptions import (
    InvalidArgumentException,
    LedgerConflictException,
    StorageUnavailableException,
)

logger = structlog.get_logger(__name__)

# PostgreSQL serialization_failure and deadlock_detected
CONFLICT_SQLSTATES = {"40001", "40P01"}

# numeric_value_out_of_range
OUT_OF_RANGE_SQLSTATE = "22003"


def _sqlstate(exc: DBAPIError) -> str | None:
    orig = exc.orig
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


def translate_db_error(exc: Exception) -> Exception:
    """
    Map a SQLAlchemy error to the matching domain exception.

    Errors that are not conflicts, range overflows or connectivity problems
    are returned unchanged.
    """
    if isinstance(exc, PoolTimeoutError):
        return StorageUnavailableException("Timed out waiting for a database connection")

    if isinstance(exc, DBAPIError):
        sqlstate = _sqlstate(exc)
        if sqlstate in CONFLICT_SQLSTATES:
            return LedgerConflictException()
        if sqlstate == OUT_OF_RANGE_SQLSTATE:
            return InvalidArgumentException("Value out of range for storage")
        if exc.connection_invalidated or isinstance(exc, OperationalError):
            return StorageUnavailableException(f"Database error: {exc.orig}")

    return exc


def translate_storage_errors(func):
    """Decorator for async repository methods that translates driver errors."""

    @wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except (DBAPIError, PoolTimeoutError) as exc:
            translated = translate_db_error(exc)
            if translated is exc:
                raise
            logger.warning(
                "storage_error",
                operation=func.__qualname__,
                error_type=type(exc).__name__,
                code=translated.code,
            )
            raise translated from exc

    return wrapper
