"""
Pydantic result models for the financial reports.

All figures are recomputed from entries on every call; none
of them come from the cached account balance.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel

from ledger_engine.models.enums import AccountType
from ledger_engine.schemas.common import Pagination


# --- Balance Sheet ---

class AccountBalanceLine(BaseModel):
    id: int
    code: str
    name: str
    account_type: AccountType
    balance: Decimal


class GroupedBalances(BaseModel):
    assets: list[AccountBalanceLine]
    liabilities: list[AccountBalanceLine]
    equity: list[AccountBalanceLine]
    revenue: list[AccountBalanceLine]
    expenses: list[AccountBalanceLine]


class BalanceSheetTotals(BaseModel):
    assets: Decimal
    liabilities: Decimal
    equity: Decimal
    revenue: Decimal
    expenses: Decimal
    net_income: Decimal
    equity_with_net_income: Decimal


class AccountingEquation(BaseModel):
    """Assets = Liabilities + Equity (including net income)."""
    assets: Decimal
    liabilities: Decimal
    equity: Decimal
    balances: bool


class BalanceSheetResult(BaseModel):
    as_of_date: datetime
    account_balances: list[AccountBalanceLine]
    grouped_balances: GroupedBalances
    totals: BalanceSheetTotals
    accounting_equation: AccountingEquation


# --- Income Statement ---

class IncomeStatementLine(BaseModel):
    id: int
    code: str
    name: str
    account_type: AccountType
    period_balance: Decimal


class IncomeStatementSection(BaseModel):
    accounts: list[IncomeStatementLine]
    total: Decimal


class ReportPeriod(BaseModel):
    start: datetime
    end: datetime


class IncomeStatementResult(BaseModel):
    period: ReportPeriod
    revenues: IncomeStatementSection
    expenses: IncomeStatementSection
    net_income: Decimal
    profit_margin: Decimal


# --- Journal ---

class JournalRow(BaseModel):
    """One entry of one transaction, flattened for the journal view."""
    transaction_id: int
    date: datetime
    description: str
    reference: str | None
    account_code: str
    account_name: str
    debit: Decimal
    credit: Decimal


class JournalResult(BaseModel):
    journal_entries: list[JournalRow]
    pagination: Pagination
