"""
Container service: books that own accounts.

Besides the usual listing and naming, this service owns the
write lock a container falls into when a transfer group is found
broken. A locked container refuses every write until someone
reconciles it; the broken group is never silently repaired.
"""

import logging

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from spent_ledger.config import get_settings
from spent_ledger.errors import (
    ConsistencyError,
    ContainerNotFoundError,
    DuplicateNameError,
    ValidationError,
)
from spent_ledger.models.container import Container
from spent_ledger.models.transaction import Transaction
from spent_ledger.schemas.container import ContainerCreate
from spent_ledger.services.locks import container_lock

logger = logging.getLogger(__name__)


class ContainerService:

    def __init__(self, db: Session):
        self.db = db

    def ensure_default(self) -> Container:
        """Create the default container if no container exists yet."""
        default = self.db.execute(
            select(Container).where(Container.is_default.is_(True))
        ).scalar_one_or_none()
        if default:
            return default

        count = self.db.execute(select(func.count(Container.id))).scalar()
        if count:
            # Containers exist but none is flagged; promote the oldest
            oldest = self.db.execute(
                select(Container).order_by(Container.id).limit(1)
            ).scalar_one()
            oldest.is_default = True
            self.db.flush()
            return oldest

        default = Container(
            name=get_settings().DEFAULT_CONTAINER_NAME,
            is_default=True,
        )
        self.db.add(default)
        self.db.flush()
        logger.info("Created default container %r", default.name)
        return default

    def list_containers(self) -> list[Container]:
        """Default container first, then in creation order."""
        containers = self.db.execute(
            select(Container).order_by(
                Container.is_default.desc(), Container.created_at, Container.id
            )
        ).scalars().all()
        return list(containers)

    def get_container(self, container_id: int) -> Container:
        container = self.db.get(Container, container_id)
        if not container:
            raise ContainerNotFoundError(f"Container {container_id} not found")
        return container

    def add_container(self, request: ContainerCreate) -> Container:
        name = request.name.strip()
        if not name:
            raise ValidationError("Container name must not be blank")
        self._check_name_free(name)

        container = Container(name=name)
        self.db.add(container)
        self.db.flush()
        logger.info("Created container %r (id=%s)", name, container.id)
        return container

    def rename_container(self, container_id: int, request: ContainerCreate) -> Container:
        container = self.get_container(container_id)
        name = request.name.strip()
        if not name:
            raise ValidationError("Container name must not be blank")
        if name != container.name:
            self._check_name_free(name)
            container.name = name
            self.db.flush()
        return container

    def _check_name_free(self, name: str) -> None:
        existing = self.db.execute(
            select(Container).where(Container.name == name)
        ).scalar_one_or_none()
        if existing:
            raise DuplicateNameError(f"Container '{name}' already exists")

    # --- Consistency lock ---

    def ensure_writable(self, container_id: int) -> Container:
        """
        Return the container, or raise if writes to it are blocked.

        Raises ContainerNotFoundError or ConsistencyError.
        """
        container = self.get_container(container_id)
        if container.needs_reconciliation:
            raise ConsistencyError(
                f"Container {container_id} has broken transfers and "
                f"must be reconciled before further writes",
                container_id=container_id,
            )
        return container

    def find_broken_transfer_groups(self, container_id: int) -> list[int]:
        """
        Return the transfer ids in a container that are not a proper pair.

        A proper pair is exactly two legs whose amounts cancel and
        whose account and counterparty references are swapped.
        """
        legs = self.db.execute(
            select(Transaction)
            .where(
                Transaction.container_id == container_id,
                Transaction.transfer_id.is_not(None),
                Transaction.transfer_id != 0,
            )
            .order_by(Transaction.transfer_id, Transaction.id)
        ).scalars().all()

        groups: dict[int, list[Transaction]] = {}
        for leg in legs:
            groups.setdefault(leg.transfer_id, []).append(leg)

        return [
            transfer_id
            for transfer_id, group in groups.items()
            if not is_proper_transfer_pair(group)
        ]

    def verify(self, container_id: int) -> list[int]:
        """
        Check every transfer group and lock the container if any is broken.

        Returns the broken transfer ids. The caller commits so
        the lock is persisted.
        """
        with container_lock(container_id):
            container = self.get_container(container_id)
            broken = self.find_broken_transfer_groups(container_id)
            if broken and not container.needs_reconciliation:
                container.needs_reconciliation = True
                self.db.flush()
                logger.error(
                    "Container %s locked: broken transfer groups %s",
                    container_id, broken,
                )
            return broken

    def mark_reconciled(self, container_id: int) -> Container:
        """
        Clear the write lock once the ledger is clean again.

        Raises ConsistencyError if broken groups remain.
        """
        with container_lock(container_id):
            container = self.get_container(container_id)
            broken = self.find_broken_transfer_groups(container_id)
            if broken:
                raise ConsistencyError(
                    f"Container {container_id} still has broken "
                    f"transfer groups: {broken}",
                    container_id=container_id,
                )
            if container.needs_reconciliation:
                container.needs_reconciliation = False
                self.db.flush()
                logger.info("Container %s reconciled and unlocked", container_id)
            return container


def is_proper_transfer_pair(legs: list[Transaction]) -> bool:
    if len(legs) != 2:
        return False
    first, second = legs
    return (
        first.amount == -second.amount
        and first.amount != 0
        and first.account_id == second.transfer_account_id
        and second.account_id == first.transfer_account_id
    )
