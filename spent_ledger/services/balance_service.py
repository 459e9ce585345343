"""
Balance service: derives account balances from the ledger.

A balance is never stored. It is the account's opening balance
plus the sum of every stored amount on the account, transfer legs
included. Because stored signs are already normalized, the sum
needs no knowledge of the account's classification.
"""

from datetime import datetime

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from spent_ledger.models.account import Account
from spent_ledger.models.transaction import Transaction
from spent_ledger.schemas.account import AccountBalanceResponse
from spent_ledger.services.account_service import AccountService
from spent_ledger.services.locks import container_lock
from spent_ledger.services.periods import as_naive_local


class BalanceService:

    def __init__(self, db: Session):
        self.db = db
        self.account_service = AccountService(db)

    def current_balance(self, account_id: int) -> int:
        """Opening balance plus every transaction on the account."""
        return self.balance_as_of(account_id, None)

    def balance_as_of(self, account_id: int, as_of: datetime | None) -> int:
        """
        Balance counting only transactions dated on or before as_of.

        as_of=None counts everything. Raises AccountNotFoundError.
        """
        account = self.account_service.get_account(account_id)
        with container_lock(account.container_id):
            query = select(func.coalesce(func.sum(Transaction.amount), 0)).where(
                Transaction.account_id == account_id
            )
            if as_of is not None:
                query = query.where(Transaction.date <= as_naive_local(as_of))
            total = self.db.execute(query).scalar()
        return account.opening_balance + int(total)

    def account_balances(
        self, container_id: int, as_of: datetime | None = None
    ) -> list[AccountBalanceResponse]:
        """Every account in a container with its balance, by name."""
        with container_lock(container_id):
            join_on = Transaction.account_id == Account.id
            if as_of is not None:
                join_on = join_on & (Transaction.date <= as_naive_local(as_of))

            rows = self.db.execute(
                select(Account, func.coalesce(func.sum(Transaction.amount), 0))
                .outerjoin(Transaction, join_on)
                .where(Account.container_id == container_id)
                .group_by(Account.id)
                .order_by(Account.name.asc())
            ).all()

        return [
            AccountBalanceResponse(
                id=account.id,
                name=account.name,
                classification=account.classification,
                opening_balance=account.opening_balance,
                balance=account.opening_balance + int(total),
                container_id=account.container_id,
                created_at=account.created_at,
            )
            for account, total in rows
        ]
