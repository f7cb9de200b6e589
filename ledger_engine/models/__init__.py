"""
Database models package.

All models must be imported here so that Alembic can discover
them through Base.metadata when generating migrations.
"""

from ledger_engine.models.base import Base
from ledger_engine.models.enums import AccountType, DEBIT_NORMAL_TYPES
from ledger_engine.models.account import Account
from ledger_engine.models.transaction import Transaction
from ledger_engine.models.transaction_entry import TransactionEntry

__all__ = [
    "Base",
    "AccountType",
    "DEBIT_NORMAL_TYPES",
    "Account",
    "Transaction",
    "TransactionEntry",
]
