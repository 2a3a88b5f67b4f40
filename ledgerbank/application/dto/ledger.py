"""Data transfer objects for ledger queries: budgets, reconciliation, exports."""

from dataclasses import dataclass
from typing import Iterator, List

from .transaction import TransactionResponse


@dataclass(frozen=True)
class BudgetResponse:
    """Transactions selected by a budget prefix query."""

    account_id: int
    budget_cents: int
    total_cents: int
    transactions: List[TransactionResponse]


@dataclass(frozen=True)
class ReconciliationResponse:
    """Outcome of comparing an account's cached aggregates with its ledger."""

    account_id: int
    stored_balance_cents: int
    computed_balance_cents: int
    drift_cents: int
    stored_transaction_count: int
    computed_transaction_count: int
    in_sync: bool
    repaired: bool

    @classmethod
    def from_report(cls, report) -> "ReconciliationResponse":
        return cls(
            account_id=report.account_id,
            stored_balance_cents=report.stored_balance_cents,
            computed_balance_cents=report.computed_balance_cents,
            drift_cents=report.drift_cents,
            stored_transaction_count=report.stored_transaction_count,
            computed_transaction_count=report.computed_transaction_count,
            in_sync=report.in_sync,
            repaired=report.repaired,
        )


@dataclass(frozen=True)
class ExportResponse:
    """A CSV document ready to be streamed as a file download."""

    filename: str
    content: Iterator[bytes]
    media_type: str = "text/csv"
