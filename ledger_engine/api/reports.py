"""
Report API endpoints.
"""

from datetime import datetime

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ledger_engine.config import get_settings
from ledger_engine.errors import LedgerError
from ledger_engine.models.base import get_db
from ledger_engine.services.report_service import ReportService
from ledger_engine.schemas.report import (
    BalanceSheetResult,
    IncomeStatementResult,
    JournalResult,
)
from ledger_engine.api.common import http_error

router = APIRouter(prefix="/reports", tags=["Reports"])


@router.get("/balance-sheet", response_model=BalanceSheetResult)
def balance_sheet(
    as_of_date: datetime | None = None,
    db: Session = Depends(get_db),
):
    """Balance sheet as of a date (default now)."""
    return ReportService(db).balance_sheet(as_of_date)


@router.get("/income-statement", response_model=IncomeStatementResult)
def income_statement(
    start_date: datetime | None = None,
    end_date: datetime | None = None,
    db: Session = Depends(get_db),
):
    """Income statement for a period (default: month to date)."""
    return ReportService(db).income_statement(start_date, end_date)


@router.get("/journal", response_model=JournalResult)
def journal(
    start_date: datetime | None = None,
    end_date: datetime | None = None,
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1),
    db: Session = Depends(get_db),
):
    """Journal of entries in chronological order."""
    try:
        return ReportService(db).journal(
            start_date,
            end_date,
            page=page,
            limit=limit or get_settings().JOURNAL_PAGE_SIZE,
        )
    except LedgerError as e:
        raise http_error(db, e)
