"""
Pydantic schemas for category operations.
"""

import enum

from pydantic import BaseModel, Field

from spent_ledger.models.enums import CategoryType


class CategoryCreate(BaseModel):
    name: str = Field(max_length=100)
    category_type: str = CategoryType.EXPENSE.value


class CategoryResponse(BaseModel):
    name: str
    category_type: CategoryType
    is_default: bool

    model_config = {"from_attributes": True}


class CategorySource(str, enum.Enum):
    """Where a category listing came from."""
    STORE = "store"
    DEFAULTS = "defaults"


class CategoryListing(BaseModel):
    """
    Outcome of listing categories.

    source is DEFAULTS when the store could not be read and the
    built-in list was returned instead.
    """
    source: CategorySource
    categories: list[CategoryResponse]

    @property
    def from_store(self) -> bool:
        return self.source == CategorySource.STORE
