"""
Pydantic schemas for container (book) operations.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class ContainerCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)


class ContainerResponse(BaseModel):
    id: int
    name: str
    is_default: bool
    needs_reconciliation: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class VerificationResponse(BaseModel):
    container_id: int
    broken_transfer_ids: list[int]
    locked: bool
