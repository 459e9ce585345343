"""
Database models package.

All models must be imported here so that Alembic can discover
them through Base.metadata when generating migrations.
"""

from spent_ledger.models.base import Base
from spent_ledger.models.enums import (
    AccountClassification,
    Polarity,
    CategoryType,
    TransactionKind,
    polarity,
)
from spent_ledger.models.container import Container
from spent_ledger.models.account import Account
from spent_ledger.models.category import Category
from spent_ledger.models.transaction import Transaction
from spent_ledger.models.transfer_group import TransferGroup

__all__ = [
    "Base",
    "AccountClassification",
    "Polarity",
    "CategoryType",
    "TransactionKind",
    "polarity",
    "Container",
    "Account",
    "Category",
    "Transaction",
    "TransferGroup",
]
