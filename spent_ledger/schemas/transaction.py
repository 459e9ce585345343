"""
Pydantic schemas for transaction and transfer operations.

All amounts are integer minor units (cents).
"""

from datetime import datetime

from pydantic import BaseModel, Field

from spent_ledger.models.enums import TransactionKind


class TransactionCreate(BaseModel):
    """
    A direct income or expense entry.

    amount is the magnitude the user typed; its sign is ignored
    and the stored sign is derived from kind and the account's
    classification.
    """
    account_id: int
    amount: int
    kind: TransactionKind
    category: str | None = Field(default=None, max_length=100)
    description: str | None = Field(default=None, max_length=255)
    date: datetime | None = None


class TransferCreate(BaseModel):
    from_account_id: int
    to_account_id: int
    amount: int
    description: str | None = Field(default=None, max_length=255)
    date: datetime | None = None


class TransactionResponse(BaseModel):
    id: int
    amount: int
    description: str
    category: str | None
    kind: TransactionKind | None
    date: datetime
    container_id: int
    account_id: int
    transfer_id: int | None
    transfer_account_id: int | None

    model_config = {"from_attributes": True}


class TransferResponse(BaseModel):
    transfer_id: int
    debit: TransactionResponse
    credit: TransactionResponse


class ImportRequest(BaseModel):
    """CSV import: rows are recorded against one account."""
    account_id: int
    csv_content: str
    amount_column: int = Field(ge=0)
    description_column: int = Field(ge=0)
    category_column: int = Field(ge=0)
    date_column: int = Field(ge=0)
    skip_header: bool = True


class ImportResult(BaseModel):
    success_count: int
    error_count: int
    errors: list[str]
