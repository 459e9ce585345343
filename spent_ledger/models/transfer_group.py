"""
Transfer group model.

One row per transfer. Its id is the transfer_id both legs carry,
so ids are handed out by the database and stay unique across
containers even when two books record transfers at once.
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from spent_ledger.models.base import Base


class TransferGroup(Base):
    __tablename__ = "transfer_groups"
    # Never reuse the id of a deleted group
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(primary_key=True)
    container_id: Mapped[int] = mapped_column(
        ForeignKey("containers.id"), nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.now
    )

    def __repr__(self) -> str:
        return f"<TransferGroup {self.id} in container {self.container_id}>"
