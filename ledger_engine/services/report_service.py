"""
Report service: balance sheet, income statement and journal.

Reports are read-only and are rebuilt from entries on every
call. They never read Account.balance, so a report as of a past
date (or taken while balances are being backfilled) is still
consistent with the entries it covers.

Entry amounts are signed with the same polarity rule the
BalanceLedger uses: ASSET and EXPENSE accounts show debits as
positive, LIABILITY, EQUITY and REVENUE show credits as positive.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import select, func
from sqlalchemy.orm import Session, selectinload

from ledger_engine.models.account import Account
from ledger_engine.models.enums import AccountType
from ledger_engine.models.transaction import Transaction
from ledger_engine.models.transaction_entry import TransactionEntry
from ledger_engine.schemas.common import Pagination, to_naive_utc
from ledger_engine.schemas.report import (
    AccountBalanceLine,
    AccountingEquation,
    BalanceSheetResult,
    BalanceSheetTotals,
    GroupedBalances,
    IncomeStatementLine,
    IncomeStatementResult,
    IncomeStatementSection,
    JournalResult,
    JournalRow,
    ReportPeriod,
)
from ledger_engine.services.account_service import AccountService
from ledger_engine.services.transaction_service import (
    check_paging,
    date_range_conditions,
)
from ledger_engine.services.validation import (
    BALANCE_TOLERANCE,
    ZERO,
    balance_delta,
    to_amount,
)

# Balance sheet group for each account type
GROUP_KEYS = {
    AccountType.ASSET: "assets",
    AccountType.LIABILITY: "liabilities",
    AccountType.EQUITY: "equity",
    AccountType.REVENUE: "revenue",
    AccountType.EXPENSE: "expenses",
}


class ReportService:

    def __init__(self, db: Session):
        self.db = db

    def _sums_by_account(self, *conditions) -> dict[int, tuple[Decimal, Decimal]]:
        """Total debits and credits per account over entries matching conditions."""
        rows = self.db.execute(
            select(
                TransactionEntry.account_id,
                func.coalesce(func.sum(TransactionEntry.debit), 0),
                func.coalesce(func.sum(TransactionEntry.credit), 0),
            )
            .where(*conditions)
            .group_by(TransactionEntry.account_id)
        ).all()

        return {
            account_id: (to_amount(debits), to_amount(credits))
            for account_id, debits, credits in rows
        }

    def balance_sheet(self, as_of_date: datetime | None = None) -> BalanceSheetResult:
        """
        Balances of every account as of a point in time.

        Includes entries created at or before as_of_date (now if
        omitted). Net income (revenue - expenses) is folded into
        equity for the accounting equation check.
        """
        as_of = to_naive_utc(as_of_date) or datetime.utcnow()

        accounts = AccountService(self.db).list_accounts()
        sums = self._sums_by_account(TransactionEntry.created_at <= as_of)

        lines = []
        for account in accounts:
            debits, credits = sums.get(account.id, (ZERO, ZERO))
            lines.append(AccountBalanceLine(
                id=account.id,
                code=account.code,
                name=account.name,
                account_type=account.account_type,
                balance=balance_delta(account.account_type, debits, credits),
            ))

        grouped: dict[str, list[AccountBalanceLine]] = {
            key: [] for key in GROUP_KEYS.values()
        }
        for line in lines:
            grouped[GROUP_KEYS[line.account_type]].append(line)

        totals = {
            key: sum((line.balance for line in group), ZERO)
            for key, group in grouped.items()
        }

        net_income = totals["revenue"] - totals["expenses"]
        equity_with_net_income = totals["equity"] + net_income
        gap = totals["assets"] - (totals["liabilities"] + equity_with_net_income)

        return BalanceSheetResult(
            as_of_date=as_of,
            account_balances=lines,
            grouped_balances=GroupedBalances(**grouped),
            totals=BalanceSheetTotals(
                **totals,
                net_income=net_income,
                equity_with_net_income=equity_with_net_income,
            ),
            accounting_equation=AccountingEquation(
                assets=totals["assets"],
                liabilities=totals["liabilities"],
                equity=equity_with_net_income,
                balances=abs(gap) < BALANCE_TOLERANCE,
            ),
        )

    def income_statement(
        self,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
    ) -> IncomeStatementResult:
        """
        Revenue and expenses over [start_date, end_date].

        start_date defaults to the first day of the current
        month, end_date to now. Only accounts whose period
        balance is positive are listed, and the section totals
        are the sums of the listed accounts.
        """
        now = datetime.utcnow()
        start = to_naive_utc(start_date) or datetime(now.year, now.month, 1)
        end = to_naive_utc(end_date) or now

        accounts = self.db.execute(
            select(Account)
            .where(Account.account_type.in_(
                [AccountType.REVENUE, AccountType.EXPENSE]
            ))
            .order_by(Account.code)
        ).scalars().all()

        sums = self._sums_by_account(
            *date_range_conditions(TransactionEntry.created_at, start, end)
        )

        revenues = []
        expenses = []
        for account in accounts:
            debits, credits = sums.get(account.id, (ZERO, ZERO))
            period_balance = balance_delta(account.account_type, debits, credits)
            # TODO: confirm with finance whether accounts that net
            # negative for the period should still count toward totals.
            if period_balance <= 0:
                continue

            line = IncomeStatementLine(
                id=account.id,
                code=account.code,
                name=account.name,
                account_type=account.account_type,
                period_balance=period_balance,
            )
            if account.account_type == AccountType.REVENUE:
                revenues.append(line)
            else:
                expenses.append(line)

        total_revenue = sum((line.period_balance for line in revenues), ZERO)
        total_expenses = sum((line.period_balance for line in expenses), ZERO)
        net_income = total_revenue - total_expenses

        if total_revenue > 0:
            profit_margin = net_income / total_revenue * 100
        else:
            profit_margin = ZERO

        return IncomeStatementResult(
            period=ReportPeriod(start=start, end=end),
            revenues=IncomeStatementSection(accounts=revenues, total=total_revenue),
            expenses=IncomeStatementSection(accounts=expenses, total=total_expenses),
            net_income=net_income,
            profit_margin=profit_margin,
        )

    def journal(
        self,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
        page: int = 1,
        limit: int = 50,
    ) -> JournalResult:
        """
        Chronological journal, one row per entry.

        Pages over transactions (oldest first); each page lists
        the entries of its transactions with debits before
        credits. pagination.total counts transactions.
        """
        check_paging(page, limit)
        conditions = date_range_conditions(
            Transaction.date, to_naive_utc(start_date), to_naive_utc(end_date)
        )

        total = self.db.execute(
            select(func.count()).select_from(Transaction).where(*conditions)
        ).scalar()

        transactions = self.db.execute(
            select(Transaction)
            .options(
                selectinload(Transaction.entries)
                .selectinload(TransactionEntry.account)
            )
            .where(*conditions)
            .order_by(
                Transaction.date.asc(),
                Transaction.created_at.asc(),
                Transaction.id.asc(),
            )
            .offset((page - 1) * limit)
            .limit(limit)
        ).scalars().all()

        rows = []
        for txn in transactions:
            # Stable sort keeps creation order among equal debits
            for entry in sorted(txn.entries, key=lambda e: e.debit, reverse=True):
                rows.append(JournalRow(
                    transaction_id=txn.id,
                    date=txn.date,
                    description=txn.description,
                    reference=txn.reference,
                    account_code=entry.account.code,
                    account_name=entry.account.name,
                    debit=entry.debit,
                    credit=entry.credit,
                ))

        return JournalResult(
            journal_entries=rows,
            pagination=Pagination.build(total, page, limit),
        )
