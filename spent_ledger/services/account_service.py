"""
Account service: the account registry.

Accounts are created once and never updated or deleted. Their
classification decides the sign convention applied when entries
are recorded, so it is validated here and fixed for life.
"""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from spent_ledger.errors import (
    AccountNotFoundError,
    DuplicateNameError,
    InvalidClassificationError,
    ValidationError,
)
from spent_ledger.models.account import Account
from spent_ledger.models.enums import AccountClassification
from spent_ledger.schemas.account import AccountCreate
from spent_ledger.services.container_service import ContainerService
from spent_ledger.services.locks import container_lock

logger = logging.getLogger(__name__)


def parse_classification(value) -> AccountClassification:
    """Parse a classification, accepting surrounding whitespace."""
    if isinstance(value, AccountClassification):
        return value
    try:
        return AccountClassification(str(value).strip())
    except ValueError:
        allowed = ", ".join(c.value for c in AccountClassification)
        raise InvalidClassificationError(
            f"Unknown classification '{value}' (expected one of: {allowed})"
        ) from None


class AccountService:

    def __init__(self, db: Session):
        self.db = db
        self.container_service = ContainerService(db)

    def create_account(self, request: AccountCreate) -> Account:
        """
        Create an account in a container.

        Raises ValidationError for a blank name,
        InvalidClassificationError, ContainerNotFoundError,
        DuplicateNameError, or ConsistencyError if the container
        is locked.
        """
        name = request.name.strip()
        if not name:
            raise ValidationError("Account name must not be blank")
        classification = parse_classification(request.classification)

        with container_lock(request.container_id):
            self.container_service.ensure_writable(request.container_id)

            existing = self.db.execute(
                select(Account).where(
                    Account.container_id == request.container_id,
                    Account.name == name,
                )
            ).scalar_one_or_none()
            if existing:
                raise DuplicateNameError(
                    f"Account '{name}' already exists in container "
                    f"{request.container_id}"
                )

            account = Account(
                name=name,
                classification=classification,
                opening_balance=request.opening_balance,
                container_id=request.container_id,
            )
            self.db.add(account)
            self.db.flush()

        logger.info(
            "Created %s account %r (id=%s) in container %s",
            classification.value, name, account.id, request.container_id,
        )
        return account

    def get_account(self, account_id: int) -> Account:
        """Get an account by ID."""
        account = self.db.get(Account, account_id)
        if not account:
            raise AccountNotFoundError(f"Account {account_id} not found")
        return account

    def list_accounts(self, container_id: int) -> list[Account]:
        """All accounts in a container, in creation order."""
        accounts = self.db.execute(
            select(Account)
            .where(Account.container_id == container_id)
            .order_by(Account.id)
        ).scalars().all()
        return list(accounts)
