"""
Pydantic schemas for account operations.

classification is accepted as a plain string so that an
unrecognized value reaches the account service and is reported
as InvalidClassificationError rather than a generic parse error.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from spent_ledger.models.enums import AccountClassification


class AccountCreate(BaseModel):
    """Request to create an account in a container."""
    container_id: int
    name: str = Field(max_length=100)
    classification: str
    opening_balance: int = 0


class AccountResponse(BaseModel):
    id: int
    name: str
    classification: AccountClassification
    opening_balance: int
    container_id: int
    created_at: datetime

    model_config = {"from_attributes": True}


class AccountBalanceResponse(BaseModel):
    """An account together with its derived balance."""
    id: int
    name: str
    classification: AccountClassification
    opening_balance: int
    balance: int
    container_id: int
    created_at: datetime
