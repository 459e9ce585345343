"""
Report API endpoints.

Statements are computed on every request; nothing is cached.
"""

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from spent_ledger.errors import LedgerError, http_status_for
from spent_ledger.models.base import get_db
from spent_ledger.services.report_service import ReportService
from spent_ledger.schemas.report import (
    BalanceSheetReport,
    CategoryTotal,
    ProfitLossReport,
)

router = APIRouter(prefix="/containers/{container_id}/reports", tags=["Reports"])


@router.get("/profit-and-loss", response_model=ProfitLossReport)
def get_profit_and_loss(
    container_id: int,
    month: str | None = None,
    start: datetime | None = None,
    end: datetime | None = None,
    db: Session = Depends(get_db),
):
    """
    Profit-and-loss for a calendar month ("YYYY-MM") or an
    explicit start/end window.
    """
    service = ReportService(db)
    try:
        if month:
            return service.profit_and_loss_for_month(container_id, month)
        if start is None or end is None:
            raise HTTPException(
                status_code=400, detail="Provide either month or both start and end"
            )
        return service.profit_and_loss(container_id, start, end)
    except LedgerError as e:
        raise HTTPException(status_code=http_status_for(e), detail=str(e))


@router.get("/balance-sheet", response_model=BalanceSheetReport)
def get_balance_sheet(
    container_id: int,
    month: str | None = None,
    as_of: datetime | None = None,
    db: Session = Depends(get_db),
):
    """Balance sheet as of a month end or an explicit moment."""
    service = ReportService(db)
    try:
        if month:
            return service.balance_sheet_for_month(container_id, month)
        if as_of is None:
            raise HTTPException(
                status_code=400, detail="Provide either month or as_of"
            )
        return service.balance_sheet(container_id, as_of)
    except LedgerError as e:
        raise HTTPException(status_code=http_status_for(e), detail=str(e))


@router.get("/net-flow")
def get_net_flow(
    container_id: int,
    month: str | None = None,
    db: Session = Depends(get_db),
):
    """Net of income and expense entries for a month, or all time."""
    try:
        net = ReportService(db).net_flow(container_id, month)
    except LedgerError as e:
        raise HTTPException(status_code=http_status_for(e), detail=str(e))
    return {"container_id": container_id, "month": month, "net": net}


@router.get("/expense-by-category", response_model=list[CategoryTotal])
def get_expense_by_category(
    container_id: int,
    month: str,
    db: Session = Depends(get_db),
):
    try:
        return ReportService(db).expense_totals_by_category(container_id, month)
    except LedgerError as e:
        raise HTTPException(status_code=http_status_for(e), detail=str(e))
