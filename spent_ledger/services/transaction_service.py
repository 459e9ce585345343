"""
Transaction service: the ledger of direct income and expense entries.

The sign convention lives here and nowhere else:

1. The user enters a magnitude and a kind (income or expense).
2. Expense becomes negative, income positive.
3. On a credit-natural account (liability, equity) the sign is
   flipped once more.

After step 3 a positive stored amount always increases the
account's balance, so balances and reports just add amounts up.
Transfers do not pass through here; see TransferService.
"""

import logging
import math
from datetime import datetime
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from spent_ledger.errors import (
    InvalidAmountError,
    MissingCategoryError,
    TransactionNotFoundError,
    ValidationError,
)
from spent_ledger.models.enums import (
    AccountClassification,
    Polarity,
    TransactionKind,
    polarity,
)
from spent_ledger.models.transaction import Transaction
from spent_ledger.schemas.transaction import TransactionCreate
from spent_ledger.services.account_service import AccountService
from spent_ledger.services.category_service import CategoryService
from spent_ledger.services.container_service import ContainerService
from spent_ledger.services.locks import container_lock
from spent_ledger.services.periods import as_naive_local, month_range

logger = logging.getLogger(__name__)

DEFAULT_DESCRIPTION = "Untitled"


def validate_amount(value) -> int:
    """
    Return the magnitude of an amount in minor units.

    Raises InvalidAmountError for zero, non-numeric, non-finite
    or fractional values.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise InvalidAmountError(f"Amount must be a number, got {value!r}")
    if isinstance(value, float) and not math.isfinite(value):
        raise InvalidAmountError(f"Amount must be finite, got {value!r}")
    if isinstance(value, Decimal) and not value.is_finite():
        raise InvalidAmountError(f"Amount must be finite, got {value!r}")
    if value != int(value):
        raise InvalidAmountError(
            f"Amount must be a whole number of minor units, got {value!r}"
        )
    magnitude = abs(int(value))
    if magnitude == 0:
        raise InvalidAmountError("Amount must not be zero")
    return magnitude


def signed_amount(
    kind: TransactionKind,
    magnitude: int,
    classification: AccountClassification,
) -> int:
    """The amount to store for an entry of `kind` on an account."""
    base = abs(magnitude)
    amount = -base if TransactionKind(kind) == TransactionKind.EXPENSE else base
    if polarity(classification) == Polarity.CREDIT:
        amount = -amount
    return amount


class TransactionService:

    def __init__(self, db: Session):
        self.db = db
        self.account_service = AccountService(db)
        self.category_service = CategoryService(db)
        self.container_service = ContainerService(db)

    def record_transaction(self, request: TransactionCreate) -> Transaction:
        """
        Record a direct income or expense entry.

        Raises InvalidAmountError, MissingCategoryError,
        AccountNotFoundError, CategoryNotFoundError or
        ConsistencyError. Nothing is written on failure.
        """
        magnitude = validate_amount(request.amount)
        category_name = (request.category or "").strip()
        if not category_name:
            raise MissingCategoryError("A category is required for income and expense entries")

        account = self.account_service.get_account(request.account_id)

        with container_lock(account.container_id):
            self.container_service.ensure_writable(account.container_id)
            category = self.category_service.get_category(category_name)

            txn = Transaction(
                amount=signed_amount(request.kind, magnitude, account.classification),
                description=(request.description or "").strip() or DEFAULT_DESCRIPTION,
                category=category.name,
                kind=request.kind,
                date=as_naive_local(request.date) if request.date else datetime.now(),
                container_id=account.container_id,
                account_id=account.id,
            )
            self.db.add(txn)
            self.db.flush()

        logger.info(
            "Recorded %s of %d on account %s as %d (%s)",
            txn.kind.value, magnitude, account.id, txn.amount, category.name,
        )
        return txn

    def get_transaction(self, transaction_id: int) -> Transaction:
        """Get a transaction by ID."""
        txn = self.db.get(Transaction, transaction_id)
        if not txn:
            raise TransactionNotFoundError(f"Transaction {transaction_id} not found")
        return txn

    def get_transactions(
        self, container_id: int, limit: int | None = None
    ) -> list[Transaction]:
        """All transactions in a container, most recent first."""
        query = (
            select(Transaction)
            .where(Transaction.container_id == container_id)
            .order_by(Transaction.date.desc(), Transaction.id.desc())
        )
        return self._fetch(query, limit)

    def get_transactions_by_account(
        self, container_id: int, account_id: int, limit: int | None = None
    ) -> list[Transaction]:
        """
        Transactions on one account, most recent first, capped at limit.

        Transfer legs are included.
        """
        self.account_service.get_account(account_id)
        query = (
            select(Transaction)
            .where(
                Transaction.container_id == container_id,
                Transaction.account_id == account_id,
            )
            .order_by(Transaction.date.desc(), Transaction.id.desc())
        )
        return self._fetch(query, limit)

    def get_transactions_for_month(
        self, container_id: int, month: str, limit: int | None = None
    ) -> list[Transaction]:
        start, end = month_range(month)
        query = (
            select(Transaction)
            .where(
                Transaction.container_id == container_id,
                Transaction.date >= start,
                Transaction.date <= end,
            )
            .order_by(Transaction.date.desc(), Transaction.id.desc())
        )
        return self._fetch(query, limit)

    def _fetch(self, query, limit: int | None) -> list[Transaction]:
        if limit is not None:
            if limit < 0:
                raise ValidationError(f"limit must not be negative, got {limit}")
            query = query.limit(limit)
        return list(self.db.execute(query).scalars().all())
