"""
Balance rules for the ledger.

An account's balance is the signed sum of its transactions: credits add
their amount, debits subtract it. Every ledger mutation is expressed as a
single compensating delta against that sum.
"""

from typing import Iterable

from ledgerbank.domain.entities import Transaction, TransactionType
from ledgerbank.domain.exceptions import InvalidArgumentException

# Ceiling for a single amount. Far below the 64-bit column range so that a
# balance summing many maximal amounts still fits.
MAX_AMOUNT_CENTS = 10**15


def parse_transaction_type(value) -> TransactionType:
    """
    Convert a raw type flag (0 = debit, 1 = credit) into a TransactionType.

    Raises:
        InvalidArgumentException: If the value is not a recognized type
    """
    if isinstance(value, bool):
        raise InvalidArgumentException(f"Unrecognized transaction type: {value!r}", field="type")
    try:
        return TransactionType(value)
    except ValueError:
        raise InvalidArgumentException(
            f"Unrecognized transaction type: {value!r}",
            field="type",
        ) from None


def signed_delta(amount_cents: int, txn_type: TransactionType) -> int:
    """Balance effect of a transaction of the given amount and type."""
    return amount_cents if txn_type == TransactionType.CREDIT else -amount_cents


def compensating_delta(
    old_amount_cents: int,
    old_type: TransactionType,
    new_amount_cents: int,
    new_type: TransactionType,
) -> int:
    """
    Delta that turns a balance containing the old transaction into one
    containing the new transaction instead.

    balance_new = balance_old - old_delta + new_delta
    """
    return signed_delta(new_amount_cents, new_type) - signed_delta(old_amount_cents, old_type)


def compute_balance(transactions: Iterable[Transaction]) -> int:
    """Recompute a balance from first principles."""
    return sum(signed_delta(t.amount_cents, t.type) for t in transactions)
