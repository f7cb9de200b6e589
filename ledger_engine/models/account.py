"""
Account model (chart of accounts).

Every account in the ledger (cash, payables, sales, rent, ...)
is a row here. Entries are posted against these accounts.

The code and type are fixed once the account exists: changing
the type would reinterpret the sign of every historical entry.
Only name and description may be edited.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import String, Text, DateTime, Numeric, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ledger_engine.models.base import Base
from ledger_engine.models.enums import AccountType


class Account(Base):
    """
    A single account in the chart of accounts.

    balance is a cached running total. It is written only by
    the BalanceLedger while a transaction is being created,
    updated or deleted, and always equals the polarity-weighted
    sum of the entries posted against the account.
    """

    __tablename__ = "accounts"

    id: Mapped[int] = mapped_column(primary_key=True)
    code: Mapped[str] = mapped_column(
        String(20), unique=True, nullable=False
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    account_type: Mapped[AccountType] = mapped_column(
        SAEnum(AccountType, name="account_type_enum"),
        nullable=False,
        index=True,
    )
    balance: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False, default=Decimal("0")
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    entries: Mapped[list["TransactionEntry"]] = relationship(
        back_populates="account"
    )

    def __repr__(self) -> str:
        return f"<Account {self.code} ({self.account_type.value})>"
