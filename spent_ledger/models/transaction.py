"""
Transaction model.

One signed movement of money on one account. The stored sign
always means "positive increases this account's balance", so
balances and reports can sum amounts without looking at the
account's classification.

A transfer is two transactions sharing a transfer_id: one
negative leg on the source account and one positive leg on the
destination, each pointing at the other account through
transfer_account_id. Transactions are immutable once written.
"""

from datetime import datetime

from sqlalchemy import (
    String, DateTime, BigInteger, ForeignKey, Index,
    Enum as SAEnum,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from spent_ledger.models.base import Base
from spent_ledger.models.enums import TransactionKind


class Transaction(Base):
    __tablename__ = "transactions"
    __table_args__ = (
        Index("ix_transactions_container_date", "container_id", "date"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    amount: Mapped[int] = mapped_column(BigInteger, nullable=False)
    description: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[str | None] = mapped_column(String(100), nullable=True)
    # Null for transfer legs
    kind: Mapped[TransactionKind | None] = mapped_column(
        SAEnum(
            TransactionKind,
            name="transaction_kind_enum",
            values_callable=lambda e: [m.value for m in e],
            create_constraint=True,
        ),
        nullable=True,
    )
    date: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.now
    )
    container_id: Mapped[int] = mapped_column(
        ForeignKey("containers.id"), nullable=False, index=True
    )
    account_id: Mapped[int] = mapped_column(
        ForeignKey("accounts.id"), nullable=False, index=True
    )
    transfer_id: Mapped[int | None] = mapped_column(
        BigInteger, nullable=True, index=True
    )
    transfer_account_id: Mapped[int | None] = mapped_column(
        ForeignKey("accounts.id"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.now
    )

    account: Mapped["Account"] = relationship(foreign_keys=[account_id])
    transfer_account: Mapped["Account | None"] = relationship(
        foreign_keys=[transfer_account_id]
    )

    def __repr__(self) -> str:
        return (
            f"<Transaction {self.amount} on account {self.account_id} "
            f"({self.category or 'transfer'})>"
        )
