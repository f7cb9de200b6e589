"""Business logic services."""

from ledger_engine.services.account_service import AccountService
from ledger_engine.services.balance_ledger import BalanceLedger
from ledger_engine.services.report_service import ReportService
from ledger_engine.services.transaction_service import TransactionService

__all__ = ["AccountService", "BalanceLedger", "ReportService", "TransactionService"]
