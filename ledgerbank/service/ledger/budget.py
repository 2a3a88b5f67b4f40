"""
Budget prefix query.

Selects the longest prefix of an account's spending, in ledger order, whose
running total stays within a budget ceiling. This is a greedy cutoff: the
scan stops at the first transaction that would overflow the budget, even if
a later, smaller one would still fit.
"""

from typing import Iterable, List

from ledgerbank.domain.entities import Transaction
from ledgerbank.domain.exceptions import InvalidArgumentException

from .settings import LedgerSettings, ledger_settings


def ledger_order_key(transaction: Transaction) -> tuple:
    """Sort key: creation time, then identity (insertion order) for ties."""
    return (transaction.created_at, transaction.id or 0)


def validate_budget(budget_cents: int) -> int:
    """
    Ensure a budget is a non-negative integer number of cents.

    Raises:
        InvalidArgumentException: If the budget is negative or not numeric
    """
    if isinstance(budget_cents, bool) or not isinstance(budget_cents, int):
        raise InvalidArgumentException("budget_cents must be an integer", field="budget_cents")
    if budget_cents < 0:
        raise InvalidArgumentException(
            f"budget_cents must be non-negative, got {budget_cents}",
            field="budget_cents",
        )
    return budget_cents


def select_within_budget(
    transactions: Iterable[Transaction],
    budget_cents: int,
    settings: LedgerSettings = ledger_settings,
) -> List[Transaction]:
    """
    Return the maximal ordered prefix of spending that fits the budget.

    Args:
        transactions: An account's transactions, in any order
        budget_cents: Budget ceiling in cents
        settings: Ledger settings (uses defaults if not provided)

    Returns:
        Selected transactions in ledger order. Debits are included while
        running_total + amount <= budget_cents. Credits are skipped unless
        settings.budget_credits_replenish is set, in which case they are
        included and lower the running total.
    """
    validate_budget(budget_cents)

    selected: List[Transaction] = []
    running_total = 0

    for txn in sorted(transactions, key=ledger_order_key):
        if txn.is_debit:
            if running_total + txn.amount_cents > budget_cents:
                break
            running_total += txn.amount_cents
            selected.append(txn)
        elif settings.budget_credits_replenish:
            running_total -= txn.amount_cents
            selected.append(txn)

    return selected
