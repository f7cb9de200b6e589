"""
Account API endpoints.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ledger_engine.config import get_settings
from ledger_engine.errors import LedgerError
from ledger_engine.models.base import get_db
from ledger_engine.models.enums import AccountType
from ledger_engine.services.account_service import AccountService
from ledger_engine.schemas.account import (
    AccountCreate,
    AccountUpdate,
    AccountResponse,
    AccountDetailResponse,
    RecentEntryResponse,
)
from ledger_engine.api.common import http_error

router = APIRouter(prefix="/accounts", tags=["Accounts"])


@router.get("", response_model=list[AccountResponse])
def list_accounts(
    account_type: AccountType | None = None,
    db: Session = Depends(get_db),
):
    """List accounts ordered by type, then code."""
    return AccountService(db).list_accounts(account_type)


@router.post("", response_model=AccountResponse, status_code=201)
def create_account(
    request: AccountCreate,
    db: Session = Depends(get_db),
):
    """Create a new account with a zero balance."""
    service = AccountService(db)
    try:
        account = service.create_account(request)
        db.commit()
        return account
    except LedgerError as e:
        raise http_error(db, e)


@router.get("/{account_id}", response_model=AccountDetailResponse)
def get_account(
    account_id: int,
    db: Session = Depends(get_db),
):
    """Get an account with its most recent entries."""
    service = AccountService(db)
    try:
        account = service.get_account(account_id)
    except LedgerError as e:
        raise http_error(db, e)

    entries = service.get_recent_entries(
        account_id, get_settings().RECENT_ENTRIES_LIMIT
    )
    return AccountDetailResponse(
        **AccountResponse.model_validate(account).model_dump(),
        recent_entries=[RecentEntryResponse.model_validate(e) for e in entries],
    )


@router.put("/{account_id}", response_model=AccountResponse)
def update_account(
    account_id: int,
    request: AccountUpdate,
    db: Session = Depends(get_db),
):
    """
    Edit an account's name or description.

    Code and type cannot be changed once the account exists.
    """
    service = AccountService(db)
    try:
        account = service.update_account(account_id, request)
        db.commit()
        return account
    except LedgerError as e:
        raise http_error(db, e)


@router.delete("/{account_id}")
def delete_account(
    account_id: int,
    db: Session = Depends(get_db),
):
    """Delete an account that has no entries."""
    service = AccountService(db)
    try:
        service.delete_account(account_id)
        db.commit()
    except LedgerError as e:
        raise http_error(db, e)
    return {"message": "Account deleted successfully"}
