"""
Report service: profit-and-loss and balance sheet.

Both statements are computed from the ledger on every call.

Profit-and-loss lines are sorted by total descending, ties broken
by category name ascending. A line's total is the sum of the
magnitudes of its entries, so the same category recorded against
both asset and liability accounts adds up instead of cancelling.

On the balance sheet, contra-asset accounts sit in the asset
bucket and net against total_assets by plain summation: their
reductions are stored with asset polarity, so they already carry
a negative sign. total_contra_assets repeats their share for
display.
"""

import logging
from datetime import datetime

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from spent_ledger.errors import InvalidPeriodError
from spent_ledger.models.category import Category
from spent_ledger.models.enums import (
    AccountClassification,
    CategoryType,
    TransactionKind,
)
from spent_ledger.models.transaction import Transaction
from spent_ledger.schemas.report import (
    BalanceSheetReport,
    CategoryTotal,
    ProfitLossLine,
    ProfitLossReport,
)
from spent_ledger.services.balance_service import BalanceService
from spent_ledger.services.container_service import ContainerService
from spent_ledger.services.locks import container_lock
from spent_ledger.services.periods import as_naive_local, month_key, month_range

logger = logging.getLogger(__name__)


def _sorted_lines(totals: dict[str, int]) -> list[ProfitLossLine]:
    return [
        ProfitLossLine(category=name, total=total)
        for name, total in sorted(totals.items(), key=lambda item: (-item[1], item[0]))
    ]


class ReportService:

    def __init__(self, db: Session):
        self.db = db
        self.balance_service = BalanceService(db)
        self.container_service = ContainerService(db)

    def profit_and_loss(
        self, container_id: int, start: datetime, end: datetime
    ) -> ProfitLossReport:
        """
        Income and expense per category for entries dated in [start, end].

        Transfers are excluded. Raises InvalidPeriodError if the
        window is reversed, ContainerNotFoundError.
        """
        start, end = as_naive_local(start), as_naive_local(end)
        if start > end:
            raise InvalidPeriodError(f"Period start {start} is after end {end}")
        self.container_service.get_container(container_id)

        with container_lock(container_id):
            rows = self.db.execute(
                select(
                    Transaction.kind,
                    Transaction.category,
                    Transaction.amount,
                    Category.category_type,
                )
                .outerjoin(Category, Category.name == Transaction.category)
                .where(
                    Transaction.container_id == container_id,
                    Transaction.transfer_id.is_(None),
                    Transaction.date >= start,
                    Transaction.date <= end,
                )
            ).all()

        income: dict[str, int] = {}
        expense: dict[str, int] = {}
        for kind, category, amount, category_type in rows:
            if kind is None:
                # No recorded kind: fall back on the category's type
                is_income = category_type == CategoryType.INCOME
            else:
                is_income = kind == TransactionKind.INCOME
            bucket = income if is_income else expense
            name = category or ""
            bucket[name] = bucket.get(name, 0) + abs(amount)

        total_income = sum(income.values())
        total_expense = sum(expense.values())
        return ProfitLossReport(
            start_date=start,
            end_date=end,
            income=_sorted_lines(income),
            expense=_sorted_lines(expense),
            total_income=total_income,
            total_expense=total_expense,
            net_income=total_income - total_expense,
        )

    def profit_and_loss_for_month(
        self, container_id: int, month: str
    ) -> ProfitLossReport:
        start, end = month_range(month)
        return self.profit_and_loss(container_id, start, end)

    def balance_sheet(self, container_id: int, as_of: datetime) -> BalanceSheetReport:
        """
        Account balances as of a date, bucketed by classification.

        total_assets == total_liabilities + total_equity only holds
        if net income has been posted to an equity account; nothing
        here does that automatically.
        """
        as_of = as_naive_local(as_of)
        self.container_service.get_container(container_id)
        balances = self.balance_service.account_balances(container_id, as_of)

        assets, liabilities, equity = [], [], []
        for balance in balances:
            if balance.classification in (
                AccountClassification.ASSET,
                AccountClassification.CONTRA_ASSET,
            ):
                assets.append(balance)
            elif balance.classification == AccountClassification.LIABILITY:
                liabilities.append(balance)
            else:
                equity.append(balance)

        return BalanceSheetReport(
            as_of=as_of,
            assets=assets,
            liabilities=liabilities,
            equity=equity,
            total_assets=sum(a.balance for a in assets),
            total_contra_assets=sum(
                a.balance for a in assets
                if a.classification == AccountClassification.CONTRA_ASSET
            ),
            total_liabilities=sum(a.balance for a in liabilities),
            total_equity=sum(a.balance for a in equity),
        )

    def balance_sheet_for_month(
        self, container_id: int, month: str
    ) -> BalanceSheetReport:
        _start, end = month_range(month)
        return self.balance_sheet(container_id, end)

    def available_months(self, container_id: int) -> list[str]:
        """Months ("YYYY-MM") that have transactions, newest first."""
        dates = self.db.execute(
            select(Transaction.date).where(Transaction.container_id == container_id)
        ).scalars().all()
        return sorted({month_key(d) for d in dates}, reverse=True)

    def net_flow(self, container_id: int, month: str | None = None) -> int:
        """
        Sum of stored amounts of non-transfer entries.

        Covers one month when given, otherwise all time.
        """
        query = select(func.coalesce(func.sum(Transaction.amount), 0)).where(
            Transaction.container_id == container_id,
            Transaction.transfer_id.is_(None),
        )
        if month is not None:
            start, end = month_range(month)
            query = query.where(Transaction.date >= start, Transaction.date <= end)
        return int(self.db.execute(query).scalar())

    def expense_totals_by_category(
        self, container_id: int, month: str
    ) -> list[CategoryTotal]:
        report = self.profit_and_loss_for_month(container_id, month)
        return [
            CategoryTotal(category=line.category, total=line.total)
            for line in report.expense
        ]
