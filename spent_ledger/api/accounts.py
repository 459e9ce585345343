"""
Account API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from spent_ledger.errors import LedgerError, http_status_for
from spent_ledger.models.base import get_db
from spent_ledger.services.account_service import AccountService
from spent_ledger.services.balance_service import BalanceService
from spent_ledger.services.transaction_service import TransactionService
from spent_ledger.schemas.account import (
    AccountCreate,
    AccountResponse,
    AccountBalanceResponse,
)
from spent_ledger.schemas.transaction import TransactionResponse

router = APIRouter(prefix="/accounts", tags=["Accounts"])


@router.post("", response_model=AccountResponse, status_code=201)
def create_account(
    request: AccountCreate,
    db: Session = Depends(get_db),
):
    """
    Create an account in a container.

    The classification (asset, contra_asset, liability, equity)
    cannot be changed afterwards.
    """
    service = AccountService(db)
    try:
        account = service.create_account(request)
        db.commit()
        return account
    except LedgerError as e:
        db.rollback()
        raise HTTPException(status_code=http_status_for(e), detail=str(e))


@router.get("", response_model=list[AccountResponse])
def list_accounts(
    container_id: int,
    db: Session = Depends(get_db),
):
    """All accounts in a container, in creation order."""
    return AccountService(db).list_accounts(container_id)


@router.get("/{account_id}", response_model=AccountResponse)
def get_account(
    account_id: int,
    db: Session = Depends(get_db),
):
    service = AccountService(db)
    try:
        return service.get_account(account_id)
    except LedgerError as e:
        raise HTTPException(status_code=http_status_for(e), detail=str(e))


@router.get("/{account_id}/balance", response_model=AccountBalanceResponse)
def get_account_balance(
    account_id: int,
    db: Session = Depends(get_db),
):
    """Current balance, derived from the opening balance and the ledger."""
    try:
        account = AccountService(db).get_account(account_id)
        balance = BalanceService(db).current_balance(account_id)
    except LedgerError as e:
        raise HTTPException(status_code=http_status_for(e), detail=str(e))

    return AccountBalanceResponse(
        id=account.id,
        name=account.name,
        classification=account.classification,
        opening_balance=account.opening_balance,
        balance=balance,
        container_id=account.container_id,
        created_at=account.created_at,
    )


@router.get("/{account_id}/transactions", response_model=list[TransactionResponse])
def get_account_transactions(
    account_id: int,
    limit: int | None = Query(default=None, ge=0),
    db: Session = Depends(get_db),
):
    """Transactions on an account, most recent first."""
    service = TransactionService(db)
    try:
        account = service.account_service.get_account(account_id)
        return service.get_transactions_by_account(
            account.container_id, account_id, limit
        )
    except LedgerError as e:
        raise HTTPException(status_code=http_status_for(e), detail=str(e))
