"""
Container model.

A container is a book: it owns accounts and scopes their
transactions and reports. One default container is seeded
on first start and cannot be removed.
"""

from datetime import datetime

from sqlalchemy import String, Boolean, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship

from spent_ledger.models.base import Base


class Container(Base):
    __tablename__ = "containers"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    is_default: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    # Set when a transfer group is found with a missing or
    # mismatched leg. Writes are refused until it is cleared.
    needs_reconciliation: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.now
    )

    accounts: Mapped[list["Account"]] = relationship(
        back_populates="container", order_by="Account.id"
    )

    def __repr__(self) -> str:
        return f"<Container {self.name}>"
