"""
Pydantic schemas for the financial statements.

Reports are computed on demand and never stored.
"""

from datetime import datetime

from pydantic import BaseModel

from spent_ledger.schemas.account import AccountBalanceResponse


class ProfitLossLine(BaseModel):
    category: str
    total: int


class ProfitLossReport(BaseModel):
    start_date: datetime
    end_date: datetime
    income: list[ProfitLossLine]
    expense: list[ProfitLossLine]
    total_income: int
    total_expense: int
    net_income: int


class BalanceSheetReport(BaseModel):
    as_of: datetime
    assets: list[AccountBalanceResponse]
    liabilities: list[AccountBalanceResponse]
    equity: list[AccountBalanceResponse]
    total_assets: int
    # Already included in total_assets; shown for reference
    total_contra_assets: int
    total_liabilities: int
    total_equity: int


class CategoryTotal(BaseModel):
    category: str
    total: int
