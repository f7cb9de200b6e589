"""
Transaction model.

A transaction is a dated business event (a sale, a rent
payment, an owner contribution) that owns two or more
balanced entries. Deleting a transaction deletes its entries.
"""

from datetime import datetime

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ledger_engine.models.base import Base


class Transaction(Base):
    __tablename__ = "transactions"

    id: Mapped[int] = mapped_column(primary_key=True)
    date: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow, index=True
    )
    description: Mapped[str] = mapped_column(
        String(255), nullable=False
    )
    reference: Mapped[str | None] = mapped_column(
        String(100), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    # Entries live and die with their transaction. Removing an
    # entry from this collection deletes its row on flush.
    entries: Mapped[list["TransactionEntry"]] = relationship(
        back_populates="transaction",
        cascade="all, delete-orphan",
        order_by="TransactionEntry.id",
    )

    def __repr__(self) -> str:
        return f"<Transaction {self.id} {self.description!r}>"
