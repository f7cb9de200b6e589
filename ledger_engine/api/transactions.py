"""
Transaction API endpoints.

Each write endpoint commits only after the service has
written the entries and moved every balance; any error
rolls the whole request back.
"""

from datetime import datetime

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ledger_engine.config import get_settings
from ledger_engine.errors import LedgerError
from ledger_engine.models.base import get_db
from ledger_engine.services.transaction_service import TransactionService
from ledger_engine.schemas.common import to_naive_utc
from ledger_engine.schemas.transaction import (
    TransactionCreate,
    TransactionUpdate,
    TransactionResponse,
    TransactionListResponse,
)
from ledger_engine.api.common import http_error

router = APIRouter(prefix="/transactions", tags=["Transactions"])


@router.get("", response_model=TransactionListResponse)
def list_transactions(
    start_date: datetime | None = None,
    end_date: datetime | None = None,
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1),
    db: Session = Depends(get_db),
):
    """List transactions, newest first."""
    service = TransactionService(db)
    try:
        transactions, pagination = service.list_transactions(
            start_date=to_naive_utc(start_date),
            end_date=to_naive_utc(end_date),
            page=page,
            limit=limit or get_settings().DEFAULT_PAGE_SIZE,
        )
    except LedgerError as e:
        raise http_error(db, e)

    return TransactionListResponse(
        transactions=[TransactionResponse.model_validate(t) for t in transactions],
        pagination=pagination,
    )


@router.post("", response_model=TransactionResponse, status_code=201)
def create_transaction(
    request: TransactionCreate,
    db: Session = Depends(get_db),
):
    """
    Create a transaction from a balanced set of entries.

    Every entry has either a debit or a credit, there are at
    least two entries, and total debits equal total credits.
    """
    service = TransactionService(db)
    try:
        txn = service.create_transaction(request)
        db.commit()
        return txn
    except LedgerError as e:
        raise http_error(db, e)


@router.get("/{transaction_id}", response_model=TransactionResponse)
def get_transaction(
    transaction_id: int,
    db: Session = Depends(get_db),
):
    """Get a transaction with its entries."""
    service = TransactionService(db)
    try:
        return service.get_transaction(transaction_id)
    except LedgerError as e:
        raise http_error(db, e)


@router.put("/{transaction_id}", response_model=TransactionResponse)
def update_transaction(
    transaction_id: int,
    request: TransactionUpdate,
    db: Session = Depends(get_db),
):
    """Update a transaction; balances are reversed and re-applied."""
    service = TransactionService(db)
    try:
        txn = service.update_transaction(transaction_id, request)
        db.commit()
        return txn
    except LedgerError as e:
        raise http_error(db, e)


@router.delete("/{transaction_id}")
def delete_transaction(
    transaction_id: int,
    db: Session = Depends(get_db),
):
    """Delete a transaction after reversing its balance effects."""
    service = TransactionService(db)
    try:
        service.delete_transaction(transaction_id)
        db.commit()
    except LedgerError as e:
        raise http_error(db, e)
    return {"message": "Transaction deleted successfully"}
