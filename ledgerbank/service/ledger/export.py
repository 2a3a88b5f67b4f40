"""
CSV serialization of the ledger.

Output is line oriented: a header row, then one comma-joined row per record,
each terminated by a newline. Fields are not quoted; delimiter characters
inside text fields are replaced by spaces.
"""

from typing import Iterable, Iterator

from ledgerbank.domain.entities import Account, Transaction

from .budget import ledger_order_key

TRANSACTION_COLUMNS = (
    "id",
    "name",
    "amount_cents",
    "type",
    "account_id",
    "user_id",
    "created_at",
)

ACCOUNT_COLUMNS = ("id", "name", "balance_cents", "user_id")


def _field(value) -> str:
    if value is None:
        return ""
    return str(value).replace(",", " ").replace("\r", " ").replace("\n", " ")


def _line(values) -> str:
    return ",".join(_field(v) for v in values) + "\n"


def iter_transactions_csv(transactions: Iterable[Transaction]) -> Iterator[str]:
    """
    Yield the CSV lines of an account's ledger.

    Rows are ordered by creation time, then id.
    """
    yield _line(TRANSACTION_COLUMNS)
    for txn in sorted(transactions, key=ledger_order_key):
        yield _line(
            (
                txn.id,
                txn.name,
                txn.amount_cents,
                int(txn.type),
                txn.account_id,
                txn.user_id,
                txn.created_at.isoformat(),
            )
        )


def iter_accounts_csv(accounts: Iterable[Account]) -> Iterator[str]:
    """Yield the CSV lines of an accounts listing, ordered by id."""
    yield _line(ACCOUNT_COLUMNS)
    for account in sorted(accounts, key=lambda a: a.id or 0):
        yield _line((account.id, account.name, account.balance_cents, account.user_id))


def encode_lines(lines: Iterable[str], encoding: str = "utf-8") -> Iterator[bytes]:
    """Encode CSV lines into a byte stream for a file download."""
    for line in lines:
        yield line.encode(encoding)
