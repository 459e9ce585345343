"""initial schema

Revision ID: 0001
Revises:
Create Date: 2026-10-18 00:00:00
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "containers",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False, unique=True),
        sa.Column("is_default", sa.Boolean(), nullable=False),
        sa.Column("needs_reconciliation", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_table(
        "accounts",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column(
            "classification",
            sa.Enum(
                "asset", "contra_asset", "liability", "equity",
                name="account_classification_enum",
                create_constraint=True,
            ),
            nullable=False,
        ),
        sa.Column("opening_balance", sa.BigInteger(), nullable=False),
        sa.Column(
            "container_id", sa.Integer(),
            sa.ForeignKey("containers.id"), nullable=False,
        ),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.UniqueConstraint("name", "container_id", name="uq_account_name_container"),
    )
    op.create_index("ix_accounts_container_id", "accounts", ["container_id"])
    op.create_table(
        "categories",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False, unique=True),
        sa.Column(
            "category_type",
            sa.Enum(
                "income", "expense",
                name="category_type_enum",
                create_constraint=True,
            ),
            nullable=False,
        ),
        sa.Column("is_default", sa.Boolean(), nullable=False),
    )
    op.create_table(
        "transactions",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("amount", sa.BigInteger(), nullable=False),
        sa.Column("description", sa.String(255), nullable=False),
        sa.Column("category", sa.String(100), nullable=True),
        sa.Column(
            "kind",
            sa.Enum(
                "income", "expense",
                name="transaction_kind_enum",
                create_constraint=True,
            ),
            nullable=True,
        ),
        sa.Column("date", sa.DateTime(), nullable=False),
        sa.Column(
            "container_id", sa.Integer(),
            sa.ForeignKey("containers.id"), nullable=False,
        ),
        sa.Column(
            "account_id", sa.Integer(),
            sa.ForeignKey("accounts.id"), nullable=False,
        ),
        sa.Column("transfer_id", sa.BigInteger(), nullable=True),
        sa.Column(
            "transfer_account_id", sa.Integer(),
            sa.ForeignKey("accounts.id"), nullable=True,
        ),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_transactions_container_id", "transactions", ["container_id"])
    op.create_index("ix_transactions_account_id", "transactions", ["account_id"])
    op.create_index("ix_transactions_transfer_id", "transactions", ["transfer_id"])
    op.create_index(
        "ix_transactions_container_date", "transactions", ["container_id", "date"]
    )


def downgrade() -> None:
    op.drop_table("transactions")
    op.drop_table("categories")
    op.drop_table("accounts")
    op.drop_table("containers")
