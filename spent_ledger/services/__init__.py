"""Business logic services."""

from spent_ledger.services.container_service import ContainerService
from spent_ledger.services.account_service import AccountService
from spent_ledger.services.category_service import CategoryService
from spent_ledger.services.transaction_service import TransactionService
from spent_ledger.services.transfer_service import TransferService
from spent_ledger.services.balance_service import BalanceService
from spent_ledger.services.report_service import ReportService
from spent_ledger.services.csv_service import CsvService

__all__ = [
    "ContainerService",
    "AccountService",
    "CategoryService",
    "TransactionService",
    "TransferService",
    "BalanceService",
    "ReportService",
    "CsvService",
]
