"""
Transaction display names.

Names are stored as T<type>-<NAME>, e.g. "T1-SALARY" for a credit or
"T0-GROCERIES" for a debit. The name part is uppercased and stripped of
commas and line breaks so that ledger exports need no quoting.
"""

import re

from ledgerbank.domain.entities import TransactionType
from ledgerbank.domain.exceptions import InvalidArgumentException

_TYPE_PREFIX = re.compile(r"^T[01]-")
_UNSAFE = re.compile(r"[,\r\n\t]+")
_SPACES = re.compile(r" {2,}")


def strip_type_prefix(name: str) -> str:
    """Remove a T<type>- prefix if the name carries one."""
    return _TYPE_PREFIX.sub("", name, count=1)


def sanitize_name(name: str) -> str:
    """Uppercase a name and drop delimiter characters."""
    cleaned = _UNSAFE.sub(" ", name)
    cleaned = _SPACES.sub(" ", cleaned)
    return cleaned.strip().upper()


def format_transaction_name(name: str, txn_type: TransactionType) -> str:
    """
    Build the display name for a transaction.

    Formatting an already formatted name replaces its prefix instead of
    stacking a second one.

    Raises:
        InvalidArgumentException: If nothing is left of the name once sanitized
    """
    base = sanitize_name(strip_type_prefix(sanitize_name(name)))
    if not base:
        raise InvalidArgumentException("Transaction name cannot be empty", field="name")
    return f"T{int(txn_type)}-{base}"
