"""
Transaction service: create, edit and delete ledger transactions.

Each mutating operation runs as one unit of work:
1. Validate the input (description, entry rules, accounts)
   before anything is written
2. Write the transaction and its entries
3. Move each affected account balance through the BalanceLedger
4. Flush

Editing a transaction never diffs old and new lines. Every old
entry is reversed and deleted, then the new set is created and
applied, so the balances are right whatever changed. Deleting
reverses every entry before the transaction goes.

If the database fails part-way, the session is rolled back and
an InfrastructureError is raised; no balance is left reflecting
only some of a transaction's entries. As in the rest of the
services, the caller commits.
"""

from contextlib import contextmanager
from datetime import datetime

from sqlalchemy import select, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from ledger_engine.errors import (
    AccountsNotFoundError,
    InfrastructureError,
    InvalidInputError,
    LedgerError,
    LedgerValidationError,
    TransactionNotFoundError,
)
from ledger_engine.logging_config import get_logger
from ledger_engine.models.account import Account
from ledger_engine.models.transaction import Transaction
from ledger_engine.models.transaction_entry import TransactionEntry
from ledger_engine.schemas.common import Pagination
from ledger_engine.schemas.transaction import (
    EntryInput,
    TransactionCreate,
    TransactionUpdate,
)
from ledger_engine.services.balance_ledger import BalanceLedger
from ledger_engine.services.validation import to_amount, validate_entries

logger = get_logger("services.transaction")


def date_range_conditions(column, start_date=None, end_date=None) -> list:
    """WHERE clauses for an inclusive [start_date, end_date] filter."""
    conditions = []
    if start_date is not None:
        conditions.append(column >= start_date)
    if end_date is not None:
        conditions.append(column <= end_date)
    return conditions


def check_paging(page: int, limit: int) -> None:
    if page < 1:
        raise InvalidInputError("page must be at least 1")
    if limit < 1:
        raise InvalidInputError("limit must be at least 1")


class TransactionService:

    def __init__(self, db: Session):
        self.db = db
        self.ledger = BalanceLedger(db)

    # --- Helpers ---

    @contextmanager
    def _unit_of_work(self, operation: str, **log_fields):
        """Run writes as all-or-nothing; database failures become InfrastructureError."""
        try:
            yield
            self.db.flush()
        except LedgerError:
            self.db.rollback()
            raise
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception(
                f"{operation} failed, rolled back", extra=log_fields
            )
            raise InfrastructureError(f"Failed to {operation}") from e

    def _validate(self, entries: list[EntryInput]) -> None:
        try:
            validate_entries(entries)
        except LedgerValidationError as e:
            logger.info(
                "transaction rejected",
                extra={"kind": e.kind, "reason": e.message},
            )
            raise

    def _resolve_accounts(self, entries: list[EntryInput]) -> dict[int, Account]:
        """Load every referenced account; fail if any id is unknown."""
        account_ids = {entry.account_id for entry in entries}
        accounts = self.db.execute(
            select(Account).where(Account.id.in_(account_ids))
        ).scalars().all()

        accounts_by_id = {a.id: a for a in accounts}
        missing = account_ids - set(accounts_by_id.keys())
        if missing:
            raise AccountsNotFoundError(missing)
        return accounts_by_id

    def _load(self, transaction_id: int) -> Transaction:
        txn = self.db.execute(
            select(Transaction)
            .options(
                selectinload(Transaction.entries)
                .selectinload(TransactionEntry.account)
            )
            .where(Transaction.id == transaction_id)
        ).scalar_one_or_none()

        if not txn:
            raise TransactionNotFoundError(transaction_id)
        return txn

    def _post_entries(
        self,
        txn: Transaction,
        entries: list[EntryInput],
        accounts: dict[int, Account],
    ) -> list[TransactionEntry]:
        """Create entry rows for txn, then apply each one's balance delta."""
        created = []
        for entry_data in entries:
            entry = TransactionEntry(
                account=accounts[entry_data.account_id],
                debit=to_amount(entry_data.debit),
                credit=to_amount(entry_data.credit),
            )
            txn.entries.append(entry)
            created.append(entry)

        self.db.flush()

        for entry in created:
            self.ledger.post(entry)
        return created

    # --- Operations ---

    def create_transaction(self, request: TransactionCreate) -> Transaction:
        """
        Create a transaction and post its entries.

        Raises InvalidInputError for a blank description, the
        validator's error for illegal entries, and
        AccountsNotFoundError if any entry names an unknown account.
        """
        description = request.description.strip()
        if not description:
            raise InvalidInputError("Description and entries are required")

        self._validate(request.entries)
        accounts = self._resolve_accounts(request.entries)

        with self._unit_of_work("create transaction"):
            txn = Transaction(
                date=request.date or datetime.utcnow(),
                description=description,
                reference=request.reference,
            )
            self.db.add(txn)
            self._post_entries(txn, request.entries, accounts)

        logger.info(
            "transaction created",
            extra={"transaction_id": txn.id, "entry_count": len(txn.entries)},
        )
        return txn

    def update_transaction(
        self, transaction_id: int, request: TransactionUpdate
    ) -> Transaction:
        """
        Edit a transaction, reversing and re-applying every entry.

        When no entries are sent, the existing lines are
        recreated as they were, so a description-only edit
        leaves every balance where it was.
        """
        txn = self._load(transaction_id)

        accounts = None
        if request.entries is not None:
            self._validate(request.entries)
            accounts = self._resolve_accounts(request.entries)

        fields = request.model_fields_set

        with self._unit_of_work("update transaction", transaction_id=transaction_id):
            previous = [
                EntryInput(
                    account_id=entry.account_id,
                    debit=entry.debit,
                    credit=entry.credit,
                )
                for entry in txn.entries
            ]

            # a. reverse every existing entry
            for entry in txn.entries:
                self.ledger.unpost(entry)

            # b. delete them (delete-orphan removes the rows)
            txn.entries.clear()
            self.db.flush()

            # c. scalar fields
            if request.date is not None:
                txn.date = request.date
            if request.description and request.description.strip():
                txn.description = request.description.strip()
            if "reference" in fields:
                txn.reference = request.reference or None

            # d/e. new entries, or the old ones recreated
            new_entries = request.entries if request.entries is not None else previous
            if accounts is None:
                accounts = self._resolve_accounts(new_entries)
            self._post_entries(txn, new_entries, accounts)

        logger.info(
            "transaction updated",
            extra={"transaction_id": txn.id, "entry_count": len(txn.entries)},
        )
        return txn

    def delete_transaction(self, transaction_id: int) -> None:
        """Reverse every entry's balance effect, then delete the transaction."""
        txn = self._load(transaction_id)
        entry_count = len(txn.entries)

        with self._unit_of_work("delete transaction", transaction_id=transaction_id):
            for entry in txn.entries:
                self.ledger.unpost(entry)
            self.db.delete(txn)

        logger.info(
            "transaction deleted",
            extra={"transaction_id": transaction_id, "entry_count": entry_count},
        )

    def get_transaction(self, transaction_id: int) -> Transaction:
        """Get a transaction with its entries and their accounts."""
        return self._load(transaction_id)

    def list_transactions(
        self,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
        page: int = 1,
        limit: int = 20,
    ) -> tuple[list[Transaction], Pagination]:
        """Transactions in an optional date range, newest first, one page at a time."""
        check_paging(page, limit)
        conditions = date_range_conditions(Transaction.date, start_date, end_date)

        total = self.db.execute(
            select(func.count()).select_from(Transaction).where(*conditions)
        ).scalar()

        transactions = self.db.execute(
            select(Transaction)
            .options(
                selectinload(Transaction.entries)
                .selectinload(TransactionEntry.account)
            )
            .where(*conditions)
            .order_by(Transaction.date.desc(), Transaction.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        ).scalars().all()

        return list(transactions), Pagination.build(total, page, limit)
