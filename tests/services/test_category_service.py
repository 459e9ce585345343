"""
Tests for the CategoryService (category registry).
"""

import pytest
from sqlalchemy.exc import OperationalError

from spent_ledger.errors import (
    CategoryInUseError,
    CategoryNotFoundError,
    ConflictError,
    DefaultCategoryError,
    DuplicateNameError,
    InvalidCategoryTypeError,
)
from spent_ledger.models.enums import CategoryType, TransactionKind
from spent_ledger.schemas.account import AccountCreate
from spent_ledger.schemas.category import CategoryCreate, CategorySource
from spent_ledger.schemas.transaction import TransactionCreate, TransferCreate
from spent_ledger.services.account_service import AccountService
from spent_ledger.services.category_service import (
    BUILTIN_CATEGORIES,
    CategoryService,
)
from spent_ledger.services.transaction_service import TransactionService
from spent_ledger.services.transfer_service import TransferService


def names(listing):
    return [c.name for c in listing.categories]


class TestSeeding:

    def test_first_listing_seeds_builtins(self, db_session):
        service = CategoryService(db_session)
        listing = service.get_categories()

        assert listing.source == CategorySource.STORE
        assert set(names(listing)) == {name for name, _ in BUILTIN_CATEGORIES}
        assert all(c.is_default for c in listing.categories)

    def test_seed_is_idempotent(self, db_session):
        service = CategoryService(db_session)
        assert service.seed_defaults() == 8
        assert service.seed_defaults() == 0

    def test_income_is_the_only_builtin_income_category(self, db_session):
        listing = CategoryService(db_session).get_categories()
        income = [c.name for c in listing.categories if c.category_type == CategoryType.INCOME]
        assert income == ["Income"]

    def test_defaults_listed_first_then_by_name(self, db_session, book):
        service = CategoryService(db_session)
        service.add_category(CategoryCreate(name="Aardvark care"))
        db_session.commit()

        listed = names(service.get_categories())
        assert listed[-1] == "Aardvark care"
        assert listed[:8] == sorted(listed[:8])


class TestStoreUnavailable:

    def test_falls_back_to_builtins(self, db_session, monkeypatch):
        def broken_execute(*args, **kwargs):
            raise OperationalError("SELECT", {}, Exception("unable to open database"))

        monkeypatch.setattr(db_session, "execute", broken_execute)
        listing = CategoryService(db_session).get_categories()

        assert listing.source == CategorySource.DEFAULTS
        assert listing.from_store is False
        assert "Food & Dining" in names(listing)
        assert len(listing.categories) == len(BUILTIN_CATEGORIES)


class TestAddCategory:

    def test_add_custom_category(self, db_session, book):
        service = CategoryService(db_session)
        category = service.add_category(CategoryCreate(name="Pets", category_type="expense"))
        db_session.commit()

        assert category.is_default is False
        assert category.category_type == CategoryType.EXPENSE
        assert "Pets" in names(service.get_categories())

    def test_add_income_category(self, db_session, book):
        service = CategoryService(db_session)
        category = service.add_category(CategoryCreate(name="Freelance", category_type="income"))
        assert category.category_type == CategoryType.INCOME

    def test_duplicate_rejected(self, db_session, book):
        service = CategoryService(db_session)
        with pytest.raises(DuplicateNameError):
            service.add_category(CategoryCreate(name="Shopping"))

    def test_invalid_type_rejected(self, db_session, book):
        service = CategoryService(db_session)
        with pytest.raises(InvalidCategoryTypeError):
            service.add_category(CategoryCreate(name="Odd", category_type="transfer"))


class TestDeleteCategory:

    def test_delete_default_fails_with_conflict(self, db_session, book):
        service = CategoryService(db_session)
        with pytest.raises(ConflictError):
            service.delete_category("Other")
        with pytest.raises(DefaultCategoryError):
            service.delete_category("Income")

        assert "Other" in names(service.get_categories())

    def test_delete_unused_custom_category(self, db_session, book):
        service = CategoryService(db_session)
        service.add_category(CategoryCreate(name="Pets"))
        db_session.commit()

        service.delete_category("Pets")
        db_session.commit()

        assert "Pets" not in names(service.get_categories())

    def test_delete_missing_category(self, db_session, book):
        with pytest.raises(CategoryNotFoundError):
            CategoryService(db_session).delete_category("Nope")

    def test_delete_in_use_category_fails(self, db_session, book):
        service = CategoryService(db_session)
        service.add_category(CategoryCreate(name="Pets"))
        cash = AccountService(db_session).create_account(AccountCreate(
            container_id=book.id, name="Cash", classification="asset",
        ))
        TransactionService(db_session).record_transaction(TransactionCreate(
            account_id=cash.id, amount=1200, kind=TransactionKind.EXPENSE,
            category="Pets",
        ))
        db_session.commit()

        with pytest.raises(CategoryInUseError):
            service.delete_category("Pets")
        assert "Pets" in names(service.get_categories())

    def test_transfer_legs_do_not_hold_a_custom_category(self, db_session, book):
        service = CategoryService(db_session)
        service.add_category(CategoryCreate(name="Transfer"))
        accounts = AccountService(db_session)
        cash = accounts.create_account(AccountCreate(
            container_id=book.id, name="Cash", classification="asset",
        ))
        savings = accounts.create_account(AccountCreate(
            container_id=book.id, name="Savings", classification="asset",
        ))
        TransferService(db_session).record_transfer(TransferCreate(
            from_account_id=cash.id, to_account_id=savings.id, amount=100,
        ))
        db_session.commit()

        service.delete_category("Transfer")
