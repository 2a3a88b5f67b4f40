"""Balance reconciliation report."""

from dataclasses import dataclass


@dataclass(frozen=True)
class BalanceReport:
    """
    Comparison of an account's cached aggregates with its ledger.

    stored_* are the values found on the account row before reconciliation,
    computed_* are derived from the transaction rows.
    """

    account_id: int
    stored_balance_cents: int
    computed_balance_cents: int
    stored_transaction_count: int
    computed_transaction_count: int
    repaired: bool = False

    @property
    def drift_cents(self) -> int:
        return self.stored_balance_cents - self.computed_balance_cents

    @property
    def in_sync(self) -> bool:
        return (
            self.drift_cents == 0
            and self.stored_transaction_count == self.computed_transaction_count
        )
