"""
Transfer service: moves money between two accounts.

A transfer is written as two sibling transactions sharing a
transfer_id, which is the id of a new TransferGroup row:

    source account       -amount   counterparty = destination
    destination account  +amount   counterparty = source

Both legs are added to the session and flushed in one unit of
work, so either both reach the database or neither does. The
caller commits. Transfer amounts move real money directly and
never get the classification sign flip that direct entries get.
"""

import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.orm import Session

from spent_ledger.errors import (
    ConsistencyError,
    CrossContainerTransferError,
    InvalidAmountError,
    NotFoundError,
    SameAccountTransferError,
)
from spent_ledger.models.transaction import Transaction
from spent_ledger.models.transfer_group import TransferGroup
from spent_ledger.schemas.transaction import TransferCreate
from spent_ledger.services.account_service import AccountService
from spent_ledger.services.container_service import (
    ContainerService,
    is_proper_transfer_pair,
)
from spent_ledger.services.locks import container_lock
from spent_ledger.services.periods import as_naive_local
from spent_ledger.services.transaction_service import validate_amount

logger = logging.getLogger(__name__)

TRANSFER_CATEGORY = "Transfer"
DEFAULT_TRANSFER_DESCRIPTION = "Transfer"


@dataclass
class TransferResult:
    transfer_id: int
    debit: Transaction
    credit: Transaction


class TransferService:

    def __init__(self, db: Session):
        self.db = db
        self.account_service = AccountService(db)
        self.container_service = ContainerService(db)

    def record_transfer(self, request: TransferCreate) -> TransferResult:
        """
        Record a transfer of `amount` from one account to another.

        Raises SameAccountTransferError (checked before anything
        else), InvalidAmountError, AccountNotFoundError,
        CrossContainerTransferError or ConsistencyError.
        """
        if request.from_account_id == request.to_account_id:
            raise SameAccountTransferError(
                "Source and destination accounts must be different"
            )
        if isinstance(request.amount, int) and request.amount < 0:
            raise InvalidAmountError("Transfer amount must be positive")
        magnitude = validate_amount(request.amount)

        source = self.account_service.get_account(request.from_account_id)
        destination = self.account_service.get_account(request.to_account_id)
        if source.container_id != destination.container_id:
            raise CrossContainerTransferError(
                f"Accounts {source.id} and {destination.id} belong to "
                f"different containers"
            )
        container_id = source.container_id

        with container_lock(container_id):
            self.container_service.ensure_writable(container_id)

            transfer_id = self._new_transfer_group(container_id)
            date = as_naive_local(request.date) if request.date else datetime.now()
            description = (
                (request.description or "").strip() or DEFAULT_TRANSFER_DESCRIPTION
            )

            debit = Transaction(
                amount=-magnitude,
                description=description,
                category=TRANSFER_CATEGORY,
                kind=None,
                date=date,
                container_id=container_id,
                account_id=source.id,
                transfer_id=transfer_id,
                transfer_account_id=destination.id,
            )
            credit = Transaction(
                amount=magnitude,
                description=description,
                category=TRANSFER_CATEGORY,
                kind=None,
                date=date,
                container_id=container_id,
                account_id=destination.id,
                transfer_id=transfer_id,
                transfer_account_id=source.id,
            )
            self.db.add_all([debit, credit])
            self.db.flush()

            legs = self.get_transfer_legs(transfer_id, container_id)
            if not is_proper_transfer_pair(legs):
                logger.error(
                    "Transfer %s written with %d leg(s); refusing to keep it",
                    transfer_id, len(legs),
                )
                raise ConsistencyError(
                    f"Transfer {transfer_id} was not written as a balanced pair"
                )

        logger.info(
            "Recorded transfer %s of %d from account %s to account %s",
            transfer_id, magnitude, source.id, destination.id,
        )
        return TransferResult(transfer_id=transfer_id, debit=debit, credit=credit)

    def get_transfer_legs(
        self, transfer_id: int, container_id: int | None = None
    ) -> list[Transaction]:
        """Legs of a transfer, source leg first, optionally within one container."""
        query = select(Transaction).where(Transaction.transfer_id == transfer_id)
        if container_id is not None:
            query = query.where(Transaction.container_id == container_id)
        legs = self.db.execute(
            query.order_by(Transaction.amount, Transaction.id)
        ).scalars().all()
        return list(legs)

    def get_transfer(self, transfer_id: int) -> TransferResult:
        """
        Both legs of a transfer.

        A group that no longer pairs up locks its container before
        ConsistencyError is raised; the caller commits so the lock
        sticks.
        """
        group = self.db.get(TransferGroup, transfer_id)
        if not group:
            raise NotFoundError(f"Transfer {transfer_id} not found")

        legs = self.get_transfer_legs(transfer_id, group.container_id)
        if not is_proper_transfer_pair(legs):
            self.container_service.verify(group.container_id)
            raise ConsistencyError(
                f"Transfer {transfer_id} has {len(legs)} leg(s) that do not pair up"
            )
        debit, credit = legs
        return TransferResult(transfer_id=transfer_id, debit=debit, credit=credit)

    def _new_transfer_group(self, container_id: int) -> int:
        group = TransferGroup(container_id=container_id)
        self.db.add(group)
        self.db.flush()
        return group.id
