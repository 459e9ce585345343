"""
Transaction and transfer API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from spent_ledger.errors import ConsistencyError, LedgerError, http_status_for
from spent_ledger.models.base import get_db
from spent_ledger.services.csv_service import CsvService
from spent_ledger.services.transaction_service import TransactionService
from spent_ledger.services.transfer_service import TransferService
from spent_ledger.schemas.transaction import (
    ImportRequest,
    ImportResult,
    TransactionCreate,
    TransactionResponse,
    TransferCreate,
    TransferResponse,
)

router = APIRouter(tags=["Transactions"])


@router.post("/transactions", response_model=TransactionResponse, status_code=201)
def add_transaction(
    request: TransactionCreate,
    db: Session = Depends(get_db),
):
    """
    Record an income or expense entry.

    amount is the magnitude in minor units; the stored sign
    follows from kind and the account's classification.
    """
    service = TransactionService(db)
    try:
        txn = service.record_transaction(request)
        db.commit()
        return txn
    except LedgerError as e:
        db.rollback()
        raise HTTPException(status_code=http_status_for(e), detail=str(e))


@router.post("/transactions/import", response_model=ImportResult)
def import_transactions(
    request: ImportRequest,
    db: Session = Depends(get_db),
):
    """Import CSV rows into an account. Bad rows are reported, not fatal."""
    service = CsvService(db)
    try:
        result = service.import_transactions_csv(request)
        db.commit()
        return result
    except LedgerError as e:
        db.rollback()
        raise HTTPException(status_code=http_status_for(e), detail=str(e))


@router.get("/transactions/{transaction_id}", response_model=TransactionResponse)
def get_transaction(
    transaction_id: int,
    db: Session = Depends(get_db),
):
    service = TransactionService(db)
    try:
        return service.get_transaction(transaction_id)
    except LedgerError as e:
        raise HTTPException(status_code=http_status_for(e), detail=str(e))


@router.post("/transfers", response_model=TransferResponse, status_code=201)
def add_transfer(
    request: TransferCreate,
    db: Session = Depends(get_db),
):
    """
    Move money between two accounts.

    Both legs are committed together or not at all.
    """
    service = TransferService(db)
    try:
        result = service.record_transfer(request)
        db.commit()
    except LedgerError as e:
        db.rollback()
        raise HTTPException(status_code=http_status_for(e), detail=str(e))

    return TransferResponse(
        transfer_id=result.transfer_id,
        debit=TransactionResponse.model_validate(result.debit),
        credit=TransactionResponse.model_validate(result.credit),
    )


@router.get("/transfers/{transfer_id}", response_model=TransferResponse)
def get_transfer(
    transfer_id: int,
    db: Session = Depends(get_db),
):
    service = TransferService(db)
    try:
        result = service.get_transfer(transfer_id)
    except ConsistencyError as e:
        # verify() locked the container; persist the lock
        db.commit()
        raise HTTPException(status_code=http_status_for(e), detail=str(e))
    except LedgerError as e:
        raise HTTPException(status_code=http_status_for(e), detail=str(e))

    return TransferResponse(
        transfer_id=result.transfer_id,
        debit=TransactionResponse.model_validate(result.debit),
        credit=TransactionResponse.model_validate(result.credit),
    )
