"""
Pydantic schemas for account operations.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from ledger_engine.models.enums import AccountType


# --- Request Schemas ---

class AccountCreate(BaseModel):
    """
    Request to create a new account.

    code, name and account_type are required, but an omitted or
    blank value is reported by the service as MissingField rather
    than rejected here as malformed input.
    """
    code: str | None = Field(default=None, max_length=20)
    name: str | None = Field(default=None, max_length=100)
    account_type: AccountType | None = None
    description: str | None = None


class AccountUpdate(BaseModel):
    """
    Request to edit an account.

    Only name and description are editable. A field left out
    of the request keeps its current value; an explicit null
    description clears it.
    """
    name: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = None


# --- Response Schemas ---

class AccountSummary(BaseModel):
    """Account as embedded inside entries and report rows."""
    id: int
    code: str
    name: str
    account_type: AccountType

    model_config = {"from_attributes": True}


class AccountResponse(BaseModel):
    id: int
    code: str
    name: str
    description: str | None
    account_type: AccountType
    balance: Decimal
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class TransactionSummary(BaseModel):
    id: int
    date: datetime
    description: str
    reference: str | None

    model_config = {"from_attributes": True}


class RecentEntryResponse(BaseModel):
    id: int
    transaction_id: int
    debit: Decimal
    credit: Decimal
    created_at: datetime
    transaction: TransactionSummary

    model_config = {"from_attributes": True}


class AccountDetailResponse(AccountResponse):
    """Account plus its most recent entries, newest first."""
    recent_entries: list[RecentEntryResponse]
