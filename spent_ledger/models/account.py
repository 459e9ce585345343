"""
Account model.

An account tracks one pot of money (cash, a bank account, a
credit card, owner's equity). Its balance is never stored:
it is the opening balance plus the sum of its transactions.

The classification is fixed at creation. There is no update
or delete path for accounts.
"""

from datetime import datetime

from sqlalchemy import (
    String, DateTime, BigInteger, ForeignKey, UniqueConstraint,
    Enum as SAEnum,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from spent_ledger.models.base import Base
from spent_ledger.models.enums import AccountClassification, Polarity, polarity


class Account(Base):
    __tablename__ = "accounts"
    __table_args__ = (
        UniqueConstraint("name", "container_id", name="uq_account_name_container"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    classification: Mapped[AccountClassification] = mapped_column(
        SAEnum(
            AccountClassification,
            name="account_classification_enum",
            values_callable=lambda e: [m.value for m in e],
            create_constraint=True,
        ),
        nullable=False,
    )
    opening_balance: Mapped[int] = mapped_column(
        BigInteger, nullable=False, default=0
    )
    container_id: Mapped[int] = mapped_column(
        ForeignKey("containers.id"), nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.now
    )

    container: Mapped["Container"] = relationship(back_populates="accounts")

    @property
    def polarity(self) -> Polarity:
        return polarity(self.classification)

    def __repr__(self) -> str:
        return f"<Account {self.name} ({self.classification.value})>"
