"""
Ledgerbank - Personal Banking Ledger Service

A FastAPI-based backend for users, accounts and transactions that keeps
every account's cached balance consistent with its ledger.
"""

__version__ = "0.1.0"
