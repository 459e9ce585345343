"""transfer groups

Revision ID: 0002
Revises: 0001
Create Date: 2026-10-19 00:00:00
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "0002"
down_revision: Union[str, None] = "0001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "transfer_groups",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "container_id", sa.Integer(),
            sa.ForeignKey("containers.id"), nullable=False,
        ),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sqlite_autoincrement=True,
    )
    op.create_index(
        "ix_transfer_groups_container_id", "transfer_groups", ["container_id"]
    )
    # One group per transfer already in the ledger
    op.execute(
        "INSERT INTO transfer_groups (id, container_id, created_at) "
        "SELECT transfer_id, MIN(container_id), MIN(created_at) "
        "FROM transactions "
        "WHERE transfer_id IS NOT NULL AND transfer_id != 0 "
        "GROUP BY transfer_id"
    )


def downgrade() -> None:
    op.drop_index("ix_transfer_groups_container_id", table_name="transfer_groups")
    op.drop_table("transfer_groups")
