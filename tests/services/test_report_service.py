"""
Tests for the ReportService.

Reports are rebuilt from entries, so these tests post
transactions through the TransactionService and then read
the balance sheet, income statement and journal.
"""

from datetime import datetime, timedelta
from decimal import Decimal

import pytest
from sqlalchemy import update

from ledger_engine.errors import InvalidInputError
from ledger_engine.models.enums import AccountType
from ledger_engine.models.transaction_entry import TransactionEntry
from ledger_engine.schemas.account import AccountCreate
from ledger_engine.schemas.transaction import EntryInput, TransactionCreate
from ledger_engine.services.account_service import AccountService
from ledger_engine.services.balance_ledger import BalanceLedger
from ledger_engine.services.report_service import ReportService
from ledger_engine.services.transaction_service import TransactionService


def debit(account, amount):
    return EntryInput(account_id=account.id, debit=Decimal(amount))


def credit(account, amount):
    return EntryInput(account_id=account.id, credit=Decimal(amount))


@pytest.fixture
def chart(db_session):
    """A small chart of accounts keyed by short name."""
    service = AccountService(db_session)
    specs = [
        ("cash", "1001", "Cash", AccountType.ASSET),
        ("equipment", "1500", "Equipment", AccountType.ASSET),
        ("loan", "2001", "Bank Loan", AccountType.LIABILITY),
        ("capital", "3001", "Owner's Capital", AccountType.EQUITY),
        ("sales", "4001", "Sales", AccountType.REVENUE),
        ("interest", "4002", "Interest Income", AccountType.REVENUE),
        ("rent", "5001", "Rent", AccountType.EXPENSE),
    ]
    accounts = {}
    for key, code, name, account_type in specs:
        accounts[key] = service.create_account(AccountCreate(
            code=code, name=name, account_type=account_type,
        ))
    db_session.commit()
    return accounts


def post(db_session, description, entries, when=None):
    txn = TransactionService(db_session).create_transaction(TransactionCreate(
        date=when, description=description, entries=entries,
    ))
    db_session.commit()
    return txn


@pytest.fixture
def activity(db_session, chart):
    c = chart
    post(db_session, "Owner investment", [debit(c["cash"], "10000"), credit(c["capital"], "10000")])
    post(db_session, "Loan drawn", [debit(c["cash"], "5000"), credit(c["loan"], "5000")])
    post(db_session, "Consulting sale", [debit(c["cash"], "1500"), credit(c["sales"], "1500")])
    post(db_session, "Office rent", [debit(c["rent"], "400"), credit(c["cash"], "400")])
    post(db_session, "Laptop", [debit(c["equipment"], "2000"), credit(c["cash"], "2000")])
    return chart


class TestBalanceSheet:

    def test_before_any_transaction_everything_is_zero(self, db_session, activity):
        """Scenario F."""
        sheet = ReportService(db_session).balance_sheet(datetime(2000, 1, 1))

        assert all(line.balance == 0 for line in sheet.account_balances)
        assert sheet.totals.assets == 0
        assert sheet.accounting_equation.balances is True

    def test_totals_and_equation(self, db_session, activity):
        sheet = ReportService(db_session).balance_sheet()

        assert sheet.totals.assets == Decimal("16100")
        assert sheet.totals.liabilities == Decimal("5000")
        assert sheet.totals.equity == Decimal("10000")
        assert sheet.totals.revenue == Decimal("1500")
        assert sheet.totals.expenses == Decimal("400")
        assert sheet.totals.net_income == Decimal("1100")
        assert sheet.totals.equity_with_net_income == Decimal("11100")
        assert sheet.accounting_equation.balances is True

    def test_grouping_and_order(self, db_session, activity):
        sheet = ReportService(db_session).balance_sheet()

        assert [l.code for l in sheet.grouped_balances.assets] == ["1001", "1500"]
        assert [l.code for l in sheet.grouped_balances.revenue] == ["4001", "4002"]
        assert [l.code for l in sheet.account_balances][0] == "1001"
        cash = sheet.grouped_balances.assets[0]
        assert cash.balance == Decimal("14100")

    def test_ignores_cached_balance(self, db_session, activity):
        BalanceLedger(db_session).apply_entry(activity["cash"].id, Decimal("999"))
        db_session.commit()

        sheet = ReportService(db_session).balance_sheet()
        assert sheet.grouped_balances.assets[0].balance == Decimal("14100")

    def test_as_of_date_uses_entry_creation_time(self, db_session, chart):
        post(db_session, "Old sale", [debit(chart["cash"], "300"), credit(chart["sales"], "300")])
        db_session.execute(
            update(TransactionEntry).values(created_at=datetime(2024, 1, 10))
        )
        db_session.commit()
        post(db_session, "New sale", [debit(chart["cash"], "50"), credit(chart["sales"], "50")])

        service = ReportService(db_session)
        assert service.balance_sheet(datetime(2024, 6, 1)).totals.assets == Decimal("300")
        assert service.balance_sheet(datetime(2023, 12, 31)).totals.assets == 0
        assert service.balance_sheet().totals.assets == Decimal("350")


class TestIncomeStatement:

    def _window(self, service):
        return service.income_statement(
            datetime(2000, 1, 1), datetime.utcnow() + timedelta(days=1)
        )

    def test_net_income_and_margin(self, db_session, activity):
        statement = self._window(ReportService(db_session))

        assert [l.code for l in statement.revenues.accounts] == ["4001"]
        assert statement.revenues.total == Decimal("1500")
        assert statement.expenses.total == Decimal("400")
        assert statement.net_income == Decimal("1100")
        assert round(float(statement.profit_margin), 2) == 73.33

    def test_non_positive_accounts_left_out(self, db_session, activity):
        c = activity
        post(db_session, "Interest reversal", [debit(c["interest"], "25"), credit(c["cash"], "25")])

        statement = self._window(ReportService(db_session))

        codes = [l.code for l in statement.revenues.accounts]
        assert "4002" not in codes
        assert statement.revenues.total == Decimal("1500")

    def test_margin_zero_without_revenue(self, db_session, chart):
        post(db_session, "Rent", [debit(chart["rent"], "100"), credit(chart["cash"], "100")])

        statement = self._window(ReportService(db_session))

        assert statement.revenues.total == 0
        assert statement.net_income == Decimal("-100")
        assert statement.profit_margin == 0

    def test_default_period_is_month_to_date(self, db_session, chart):
        statement = ReportService(db_session).income_statement()

        now = datetime.utcnow()
        assert statement.period.start == datetime(now.year, now.month, 1)
        assert statement.period.end <= now

    def test_period_excludes_entries_outside_window(self, db_session, activity):
        statement = ReportService(db_session).income_statement(
            datetime(2000, 1, 1), datetime(2000, 12, 31)
        )
        assert statement.revenues.accounts == []
        assert statement.net_income == 0


class TestJournal:

    def test_rows_ordered_by_date_then_debit_first(self, db_session, chart):
        c = chart
        post(
            db_session, "Second",
            [credit(c["sales"], "80"), debit(c["cash"], "80")],
            when=datetime(2025, 2, 1),
        )
        post(
            db_session, "First",
            [credit(c["capital"], "500"), debit(c["cash"], "500")],
            when=datetime(2025, 1, 1),
        )

        journal = ReportService(db_session).journal()

        assert [r.description for r in journal.journal_entries] == [
            "First", "First", "Second", "Second",
        ]
        assert [r.account_code for r in journal.journal_entries[:2]] == ["1001", "3001"]
        assert journal.journal_entries[0].debit == Decimal("500")
        assert journal.journal_entries[1].credit == Decimal("500")

    def test_paginates_by_transaction(self, db_session, chart):
        c = chart
        for day in (1, 2, 3):
            post(
                db_session, f"Day {day}",
                [debit(c["cash"], "10"), credit(c["sales"], "10")],
                when=datetime(2025, 3, day),
            )

        journal = ReportService(db_session).journal(page=2, limit=2)

        assert [r.description for r in journal.journal_entries] == ["Day 3", "Day 3"]
        assert journal.pagination.total == 3
        assert journal.pagination.total_pages == 2

    def test_date_filter(self, db_session, chart):
        c = chart
        for day in (1, 2, 3):
            post(
                db_session, f"Day {day}",
                [debit(c["cash"], "10"), credit(c["sales"], "10")],
                when=datetime(2025, 3, day),
            )

        journal = ReportService(db_session).journal(
            start_date=datetime(2025, 3, 2), end_date=datetime(2025, 3, 2)
        )
        assert {r.description for r in journal.journal_entries} == {"Day 2"}
        assert journal.pagination.total == 1

    def test_bad_limit_rejected(self, db_session):
        with pytest.raises(InvalidInputError):
            ReportService(db_session).journal(limit=0)
