"""
Ledger rules for the Ledgerbank service.

Pure functions with no I/O: balance deltas, the budget prefix cutoff,
display-name formatting and CSV serialization.
"""

from .settings import LedgerSettings, ledger_settings
from .balance import (
    MAX_AMOUNT_CENTS,
    compensating_delta,
    compute_balance,
    parse_transaction_type,
    signed_delta,
)
from .budget import ledger_order_key, select_within_budget, validate_budget
from .naming import format_transaction_name, sanitize_name, strip_type_prefix
from .export import (
    ACCOUNT_COLUMNS,
    TRANSACTION_COLUMNS,
    encode_lines,
    iter_accounts_csv,
    iter_transactions_csv,
)

__all__ = [
    # Settings
    "LedgerSettings",
    "ledger_settings",
    # Balance
    "MAX_AMOUNT_CENTS",
    "compensating_delta",
    "compute_balance",
    "parse_transaction_type",
    "signed_delta",
    # Budget
    "ledger_order_key",
    "select_within_budget",
    "validate_budget",
    # Naming
    "format_transaction_name",
    "sanitize_name",
    "strip_type_prefix",
    # Export
    "ACCOUNT_COLUMNS",
    "TRANSACTION_COLUMNS",
    "encode_lines",
    "iter_accounts_csv",
    "iter_transactions_csv",
]
