"""
Category service: the category registry.

Categories are keyed by name. The built-in set is seeded on
first use and protected from deletion. A custom category can
only be deleted while no transaction is tagged with it.
"""

import logging

from sqlalchemy import select, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from spent_ledger.errors import (
    CategoryInUseError,
    CategoryNotFoundError,
    DefaultCategoryError,
    DuplicateNameError,
    InvalidCategoryTypeError,
    ValidationError,
)
from spent_ledger.models.category import Category
from spent_ledger.models.enums import CategoryType
from spent_ledger.models.transaction import Transaction
from spent_ledger.schemas.category import (
    CategoryCreate,
    CategoryListing,
    CategoryResponse,
    CategorySource,
)

logger = logging.getLogger(__name__)


BUILTIN_CATEGORIES: list[tuple[str, CategoryType]] = [
    ("Food & Dining", CategoryType.EXPENSE),
    ("Transportation", CategoryType.EXPENSE),
    ("Shopping", CategoryType.EXPENSE),
    ("Entertainment", CategoryType.EXPENSE),
    ("Bills & Utilities", CategoryType.EXPENSE),
    ("Healthcare", CategoryType.EXPENSE),
    ("Income", CategoryType.INCOME),
    ("Other", CategoryType.EXPENSE),
]

FALLBACK_CATEGORY = "Other"


def builtin_listing() -> list[CategoryResponse]:
    """The built-in categories in listing order."""
    return sorted(
        (
            CategoryResponse(name=name, category_type=ctype, is_default=True)
            for name, ctype in BUILTIN_CATEGORIES
        ),
        key=lambda c: c.name,
    )


def parse_category_type(value) -> CategoryType:
    if isinstance(value, CategoryType):
        return value
    try:
        return CategoryType(str(value).strip().lower())
    except ValueError:
        raise InvalidCategoryTypeError(
            f"Unknown category type '{value}' (expected income or expense)"
        ) from None


class CategoryService:

    def __init__(self, db: Session):
        self.db = db

    def seed_defaults(self) -> int:
        """
        Insert the built-in categories if the table is empty.

        Returns the number of categories inserted.
        """
        count = self.db.execute(select(func.count(Category.id))).scalar()
        if count:
            return 0

        for name, category_type in BUILTIN_CATEGORIES:
            self.db.add(Category(
                name=name, category_type=category_type, is_default=True,
            ))
        self.db.flush()
        logger.info("Seeded %d built-in categories", len(BUILTIN_CATEGORIES))
        return len(BUILTIN_CATEGORIES)

    def get_categories(self) -> CategoryListing:
        """
        List categories, defaults first, then by name.

        If the store cannot be read, the built-in list is returned
        with source=DEFAULTS so the caller can tell the difference.
        """
        try:
            self.seed_defaults()
            categories = self.db.execute(
                select(Category).order_by(
                    Category.is_default.desc(), Category.name.asc()
                )
            ).scalars().all()
        except SQLAlchemyError as e:
            logger.warning("Category store unavailable, using built-ins: %s", e)
            return CategoryListing(
                source=CategorySource.DEFAULTS,
                categories=builtin_listing(),
            )

        return CategoryListing(
            source=CategorySource.STORE,
            categories=[CategoryResponse.model_validate(c) for c in categories],
        )

    def get_category(self, name: str) -> Category:
        category = self.db.execute(
            select(Category).where(Category.name == name)
        ).scalar_one_or_none()
        if not category:
            raise CategoryNotFoundError(f"Category '{name}' not found")
        return category

    def find_category(self, name: str) -> Category | None:
        return self.db.execute(
            select(Category).where(Category.name == name)
        ).scalar_one_or_none()

    def add_category(self, request: CategoryCreate) -> Category:
        """
        Add a custom category.

        Raises ValidationError for a blank name,
        InvalidCategoryTypeError or DuplicateNameError.
        """
        name = request.name.strip()
        if not name:
            raise ValidationError("Category name must not be blank")
        category_type = parse_category_type(request.category_type)

        if self.find_category(name):
            raise DuplicateNameError(f"Category '{name}' already exists")

        category = Category(
            name=name, category_type=category_type, is_default=False,
        )
        self.db.add(category)
        self.db.flush()
        logger.info("Added %s category %r", category_type.value, name)
        return category

    def delete_category(self, name: str) -> None:
        """
        Delete a custom category that no transaction uses.

        Raises CategoryNotFoundError, DefaultCategoryError or
        CategoryInUseError. Nothing is deleted on failure.
        """
        category = self.get_category(name)
        if category.is_default:
            raise DefaultCategoryError(
                f"Category '{name}' is built in and cannot be deleted"
            )

        in_use = self.db.execute(
            select(func.count(Transaction.id)).where(
                Transaction.category == name,
                Transaction.transfer_id.is_(None),
            )
        ).scalar()
        if in_use:
            raise CategoryInUseError(
                f"Category '{name}' is used by {in_use} transaction(s)"
            )

        self.db.delete(category)
        self.db.flush()
        logger.info("Deleted category %r", name)
