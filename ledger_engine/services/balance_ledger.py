"""
Balance ledger: the only writer of Account.balance.

Each call issues a single SQL statement

    UPDATE accounts SET balance = balance + :delta WHERE id = :id

so the read-increment-write happens inside the database and two
operations touching the same account cannot lose an update.

There is no validation here. Callers (the TransactionService)
have already validated the entries and resolved the accounts,
and they call in while their own unit of work is open so the
increments commit or roll back together with the entries.
"""

from decimal import Decimal

from sqlalchemy import update
from sqlalchemy.orm import Session

from ledger_engine.models.account import Account
from ledger_engine.models.transaction_entry import TransactionEntry
from ledger_engine.services.validation import balance_delta


class BalanceLedger:

    def __init__(self, db: Session):
        self.db = db

    def apply_entry(self, account_id: int, delta: Decimal) -> None:
        """Increment an account's stored balance by delta."""
        self.db.execute(
            update(Account)
            .where(Account.id == account_id)
            .values(balance=Account.balance + delta)
        )

    def reverse_entry(self, account_id: int, delta: Decimal) -> None:
        """Undo a delta previously passed to apply_entry()."""
        self.apply_entry(account_id, -delta)

    def post(self, entry: TransactionEntry) -> Decimal:
        """Apply a freshly created entry to its account. Returns the delta."""
        delta = balance_delta(
            entry.account.account_type, entry.debit, entry.credit
        )
        self.apply_entry(entry.account_id, delta)
        return delta

    def unpost(self, entry: TransactionEntry) -> Decimal:
        """
        Take a posted entry back out of its account's balance.

        Uses the entry's own account type and stored amounts, so
        the result is the same as applying reverse_delta().
        """
        delta = balance_delta(
            entry.account.account_type, entry.debit, entry.credit
        )
        self.reverse_entry(entry.account_id, delta)
        return -delta
