"""
Category API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from spent_ledger.errors import LedgerError, http_status_for
from spent_ledger.models.base import get_db
from spent_ledger.services.category_service import CategoryService
from spent_ledger.schemas.category import (
    CategoryCreate,
    CategoryListing,
    CategoryResponse,
)

router = APIRouter(prefix="/categories", tags=["Categories"])


@router.get("", response_model=CategoryListing)
def get_categories(db: Session = Depends(get_db)):
    """
    List categories.

    The response's source field says whether the list came from
    the store or is the built-in fallback.
    """
    listing = CategoryService(db).get_categories()
    if listing.from_store:
        # Persist the built-ins if this call seeded them
        db.commit()
    else:
        db.rollback()
    return listing


@router.post("", response_model=CategoryResponse, status_code=201)
def add_category(
    request: CategoryCreate,
    db: Session = Depends(get_db),
):
    service = CategoryService(db)
    try:
        category = service.add_category(request)
        db.commit()
        return category
    except LedgerError as e:
        db.rollback()
        raise HTTPException(status_code=http_status_for(e), detail=str(e))


@router.delete("/{name}", status_code=204)
def delete_category(
    name: str,
    db: Session = Depends(get_db),
):
    """Delete a custom category that no transaction uses."""
    service = CategoryService(db)
    try:
        service.delete_category(name)
        db.commit()
    except LedgerError as e:
        db.rollback()
        raise HTTPException(status_code=http_status_for(e), detail=str(e))
