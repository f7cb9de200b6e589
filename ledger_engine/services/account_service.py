"""
Account service: the chart of accounts.

Creates, edits, lists and deletes accounts. Code and type are
fixed at creation; only name and description can change. An
account can be deleted only while no entry references it.

This service never touches Account.balance. Balances move
only through the BalanceLedger while a transaction is posted.
"""

from decimal import Decimal

from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from ledger_engine.errors import (
    AccountNotFoundError,
    AccountHasEntriesError,
    DuplicateCodeError,
    MissingFieldError,
)
from ledger_engine.logging_config import get_logger
from ledger_engine.models.account import Account
from ledger_engine.models.enums import AccountType
from ledger_engine.models.transaction_entry import TransactionEntry
from ledger_engine.schemas.account import AccountCreate, AccountUpdate

logger = get_logger("services.account")

# Chart order: assets first, expenses last. Databases disagree on
# how enums sort, so the type order is applied in Python.
TYPE_ORDER = {t: i for i, t in enumerate(AccountType)}


class AccountService:

    def __init__(self, db: Session):
        self.db = db

    def create_account(self, request: AccountCreate) -> Account:
        """
        Create a new account with a zero balance.

        Raises MissingFieldError for an omitted or blank code,
        name or account type, and DuplicateCodeError if the code
        is already taken.
        """
        code = (request.code or "").strip()
        name = (request.name or "").strip()
        if not code:
            raise MissingFieldError("code")
        if not name:
            raise MissingFieldError("name")
        if request.account_type is None:
            raise MissingFieldError("account_type")

        existing = self.db.execute(
            select(Account).where(Account.code == code)
        ).scalar_one_or_none()

        if existing:
            raise DuplicateCodeError(code)

        account = Account(
            code=code,
            name=name,
            account_type=request.account_type,
            description=request.description,
            balance=Decimal("0"),
        )
        self.db.add(account)
        try:
            self.db.flush()
        except IntegrityError as e:
            # Lost a race with another request creating the same code
            raise DuplicateCodeError(code) from e

        logger.info(
            "account created",
            extra={"account_id": account.id, "account_code": code},
        )
        return account

    def update_account(self, account_id: int, request: AccountUpdate) -> Account:
        """Edit name and/or description. Fields not sent are left alone."""
        account = self.get_account(account_id)
        fields = request.model_fields_set

        if "name" in fields and request.name is not None:
            account.name = request.name.strip() or account.name
        if "description" in fields:
            account.description = request.description

        self.db.flush()
        logger.info("account updated", extra={"account_id": account.id})
        return account

    def delete_account(self, account_id: int) -> None:
        """Delete an account that has never had an entry posted to it."""
        account = self.get_account(account_id)

        entry_count = self.db.execute(
            select(func.count())
            .select_from(TransactionEntry)
            .where(TransactionEntry.account_id == account_id)
        ).scalar()

        if entry_count:
            raise AccountHasEntriesError(account_id)

        self.db.delete(account)
        self.db.flush()
        logger.info("account deleted", extra={"account_id": account_id})

    def get_account(self, account_id: int) -> Account:
        """Get an account by ID."""
        account = self.db.get(Account, account_id)
        if not account:
            raise AccountNotFoundError(account_id)
        return account

    def get_recent_entries(
        self, account_id: int, limit: int = 10
    ) -> list[TransactionEntry]:
        """Return the newest entries posted to an account, with their transactions."""
        entries = self.db.execute(
            select(TransactionEntry)
            .options(selectinload(TransactionEntry.transaction))
            .where(TransactionEntry.account_id == account_id)
            .order_by(TransactionEntry.created_at.desc(), TransactionEntry.id.desc())
            .limit(limit)
        ).scalars().all()
        return list(entries)

    def list_accounts(
        self, account_type: AccountType | None = None
    ) -> list[Account]:
        """All accounts, optionally of one type, ordered by type then code."""
        query = select(Account)
        if account_type is not None:
            query = query.where(Account.account_type == account_type)

        accounts = self.db.execute(
            query.order_by(Account.code)
        ).scalars().all()
        return sorted(accounts, key=lambda a: TYPE_ORDER[a.account_type])
