"""
Pydantic schemas for transaction operations.

These are the typed boundary in front of the entry validator:
a body with the wrong shape (missing entries, a string where an
amount belongs) never reaches the domain rules. Amount rules
themselves (one side only, no negatives, balance) are left to
the validator so that each violation gets its own error kind.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from ledger_engine.schemas.account import AccountSummary
from ledger_engine.schemas.common import Pagination, to_naive_utc


# --- Request Schemas ---

class EntryInput(BaseModel):
    """A single debit or credit line in a proposed transaction."""
    account_id: int
    debit: Decimal = Field(default=Decimal("0"), max_digits=19, decimal_places=4)
    credit: Decimal = Field(default=Decimal("0"), max_digits=19, decimal_places=4)


class TransactionCreate(BaseModel):
    date: datetime | None = None
    description: str = Field(max_length=255)
    reference: str | None = Field(default=None, max_length=100)
    entries: list[EntryInput]

    @field_validator("date")
    @classmethod
    def normalize_date(cls, v: datetime | None) -> datetime | None:
        return to_naive_utc(v)


class TransactionUpdate(BaseModel):
    """
    Partial update of a transaction.

    Omitted fields keep their current value. For reference,
    sending "" or null clears it, which is different from
    leaving the field out.
    """
    date: datetime | None = None
    description: str | None = Field(default=None, max_length=255)
    reference: str | None = Field(default=None, max_length=100)
    entries: list[EntryInput] | None = None

    @field_validator("date")
    @classmethod
    def normalize_date(cls, v: datetime | None) -> datetime | None:
        return to_naive_utc(v)


# --- Response Schemas ---

class EntryResponse(BaseModel):
    id: int
    transaction_id: int
    account_id: int
    debit: Decimal
    credit: Decimal
    created_at: datetime
    account: AccountSummary

    model_config = {"from_attributes": True}


class TransactionResponse(BaseModel):
    id: int
    date: datetime
    description: str
    reference: str | None
    created_at: datetime
    updated_at: datetime
    entries: list[EntryResponse]

    model_config = {"from_attributes": True}


class TransactionListResponse(BaseModel):
    transactions: list[TransactionResponse]
    pagination: Pagination
