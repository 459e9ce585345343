"""
Container (book) API endpoints.

Also hosts the container-scoped reads: balances, transaction
listings, CSV export, and the reconciliation lock.
"""

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session

from spent_ledger.errors import LedgerError, http_status_for
from spent_ledger.models.base import get_db
from spent_ledger.services.balance_service import BalanceService
from spent_ledger.services.container_service import ContainerService
from spent_ledger.services.csv_service import CsvService
from spent_ledger.services.report_service import ReportService
from spent_ledger.services.transaction_service import TransactionService
from spent_ledger.schemas.account import AccountBalanceResponse
from spent_ledger.schemas.container import (
    ContainerCreate,
    ContainerResponse,
    VerificationResponse,
)
from spent_ledger.schemas.transaction import TransactionResponse

router = APIRouter(prefix="/containers", tags=["Containers"])


@router.get("", response_model=list[ContainerResponse])
def list_containers(db: Session = Depends(get_db)):
    return ContainerService(db).list_containers()


@router.post("", response_model=ContainerResponse, status_code=201)
def add_container(
    request: ContainerCreate,
    db: Session = Depends(get_db),
):
    service = ContainerService(db)
    try:
        container = service.add_container(request)
        db.commit()
        return container
    except LedgerError as e:
        db.rollback()
        raise HTTPException(status_code=http_status_for(e), detail=str(e))


@router.get("/{container_id}", response_model=ContainerResponse)
def get_container(
    container_id: int,
    db: Session = Depends(get_db),
):
    try:
        return ContainerService(db).get_container(container_id)
    except LedgerError as e:
        raise HTTPException(status_code=http_status_for(e), detail=str(e))


@router.patch("/{container_id}", response_model=ContainerResponse)
def rename_container(
    container_id: int,
    request: ContainerCreate,
    db: Session = Depends(get_db),
):
    service = ContainerService(db)
    try:
        container = service.rename_container(container_id, request)
        db.commit()
        return container
    except LedgerError as e:
        db.rollback()
        raise HTTPException(status_code=http_status_for(e), detail=str(e))


@router.post("/{container_id}/verify", response_model=VerificationResponse)
def verify_container(
    container_id: int,
    db: Session = Depends(get_db),
):
    """
    Check every transfer pair in the container.

    Any broken pair locks the container against further writes.
    """
    service = ContainerService(db)
    try:
        broken = service.verify(container_id)
        db.commit()
        container = service.get_container(container_id)
    except LedgerError as e:
        db.rollback()
        raise HTTPException(status_code=http_status_for(e), detail=str(e))

    return VerificationResponse(
        container_id=container_id,
        broken_transfer_ids=broken,
        locked=container.needs_reconciliation,
    )


@router.post("/{container_id}/reconcile", response_model=ContainerResponse)
def reconcile_container(
    container_id: int,
    db: Session = Depends(get_db),
):
    """Unlock a container once its transfer pairs are whole again."""
    service = ContainerService(db)
    try:
        container = service.mark_reconciled(container_id)
        db.commit()
        return container
    except LedgerError as e:
        db.rollback()
        raise HTTPException(status_code=http_status_for(e), detail=str(e))


@router.get("/{container_id}/balances", response_model=list[AccountBalanceResponse])
def get_account_balances(
    container_id: int,
    db: Session = Depends(get_db),
):
    """Every account in the container with its current balance."""
    try:
        ContainerService(db).get_container(container_id)
    except LedgerError as e:
        raise HTTPException(status_code=http_status_for(e), detail=str(e))
    return BalanceService(db).account_balances(container_id)


@router.get("/{container_id}/transactions", response_model=list[TransactionResponse])
def get_transactions(
    container_id: int,
    limit: int | None = Query(default=None, ge=0),
    month: str | None = None,
    db: Session = Depends(get_db),
):
    """Transactions in the container, most recent first."""
    service = TransactionService(db)
    try:
        if month:
            return service.get_transactions_for_month(container_id, month, limit)
        return service.get_transactions(container_id, limit)
    except LedgerError as e:
        raise HTTPException(status_code=http_status_for(e), detail=str(e))


@router.get("/{container_id}/months", response_model=list[str])
def get_available_months(
    container_id: int,
    db: Session = Depends(get_db),
):
    return ReportService(db).available_months(container_id)


@router.get("/{container_id}/export.csv", response_class=PlainTextResponse)
def export_csv(
    container_id: int,
    db: Session = Depends(get_db),
):
    return PlainTextResponse(
        CsvService(db).export_transactions_csv(container_id),
        media_type="text/csv",
    )
