"""
Transaction entry model.

Each entry is one line of a double-entry transaction: a debit
or a credit against a single account. Within a transaction the
debits sum to the credits. That rule is enforced by the entry
validator; the per-row rule (exactly one side positive, no
negatives) is also pinned down by a CHECK constraint.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, Numeric, ForeignKey, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ledger_engine.models.base import Base


class TransactionEntry(Base):
    """
    A debit-or-credit line posted against one account.

    Entries are never patched. When a transaction's lines
    change, the old entries are reversed and deleted and a
    fresh set is created.
    """

    __tablename__ = "transaction_entries"
    __table_args__ = (
        CheckConstraint(
            "debit >= 0 AND credit >= 0", name="ck_entry_non_negative"
        ),
        CheckConstraint(
            "(debit > 0 AND credit = 0) OR (credit > 0 AND debit = 0)",
            name="ck_entry_one_side",
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    transaction_id: Mapped[int] = mapped_column(
        ForeignKey("transactions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    account_id: Mapped[int] = mapped_column(
        ForeignKey("accounts.id"), nullable=False, index=True
    )
    debit: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False, default=Decimal("0")
    )
    credit: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False, default=Decimal("0")
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow, index=True
    )

    transaction: Mapped["Transaction"] = relationship(
        back_populates="entries"
    )
    account: Mapped["Account"] = relationship(
        back_populates="entries"
    )

    def __repr__(self) -> str:
        side = "DEBIT" if self.debit > 0 else "CREDIT"
        amount = self.debit if self.debit > 0 else self.credit
        return f"<TransactionEntry {side} {amount} account={self.account_id}>"
