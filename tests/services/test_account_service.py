"""
Tests for the AccountService (account registry).
"""

import pytest

from spent_ledger.errors import (
    AccountNotFoundError,
    ConflictError,
    ContainerNotFoundError,
    DuplicateNameError,
    InvalidClassificationError,
    ValidationError,
)
from spent_ledger.models.enums import AccountClassification, Polarity
from spent_ledger.schemas.account import AccountCreate
from spent_ledger.schemas.container import ContainerCreate
from spent_ledger.services.account_service import AccountService
from spent_ledger.services.container_service import ContainerService


def make_account(service, container_id, name, classification="asset", opening=0):
    return service.create_account(AccountCreate(
        container_id=container_id,
        name=name,
        classification=classification,
        opening_balance=opening,
    ))


class TestCreateAccount:

    def test_create_account_succeeds(self, db_session, book):
        service = AccountService(db_session)
        account = make_account(service, book.id, "Cash", "asset", 100000)
        db_session.commit()

        assert account.id is not None
        assert account.name == "Cash"
        assert account.classification == AccountClassification.ASSET
        assert account.opening_balance == 100000
        assert account.container_id == book.id
        assert account.created_at is not None

    def test_name_is_trimmed(self, db_session, book):
        service = AccountService(db_session)
        account = make_account(service, book.id, "  Savings  ")
        assert account.name == "Savings"

    def test_negative_opening_balance_accepted(self, db_session, book):
        service = AccountService(db_session)
        account = make_account(service, book.id, "Overdraft", "asset", -2500)
        assert account.opening_balance == -2500

    def test_all_classifications_accepted(self, db_session, book):
        service = AccountService(db_session)
        for value in ("asset", "contra_asset", "liability", "equity"):
            account = make_account(service, book.id, f"Account {value}", value)
            assert account.classification.value == value

    def test_unknown_classification_rejected(self, db_session, book):
        service = AccountService(db_session)
        with pytest.raises(InvalidClassificationError, match="Unknown classification"):
            make_account(service, book.id, "Weird", "revenue")

    def test_invalid_classification_is_a_validation_error(self, db_session, book):
        service = AccountService(db_session)
        with pytest.raises(ValidationError):
            make_account(service, book.id, "Weird", "ASSETS")

    def test_blank_name_rejected(self, db_session, book):
        service = AccountService(db_session)
        with pytest.raises(ValidationError, match="blank"):
            make_account(service, book.id, "   ")

    def test_duplicate_name_in_container_rejected(self, db_session, book):
        service = AccountService(db_session)
        make_account(service, book.id, "Cash")
        db_session.commit()

        with pytest.raises(DuplicateNameError, match="already exists"):
            make_account(service, book.id, "Cash", "liability")

    def test_duplicate_name_is_a_conflict(self, db_session, book):
        service = AccountService(db_session)
        make_account(service, book.id, "Cash")
        db_session.commit()

        with pytest.raises(ConflictError):
            make_account(service, book.id, "Cash")

        # Registry unchanged
        assert len(service.list_accounts(book.id)) == 1

    def test_same_name_allowed_in_another_container(self, db_session, book):
        containers = ContainerService(db_session)
        business = containers.add_container(ContainerCreate(name="Business"))
        db_session.commit()

        service = AccountService(db_session)
        personal_cash = make_account(service, book.id, "Cash")
        business_cash = make_account(service, business.id, "Cash")
        db_session.commit()

        assert personal_cash.id != business_cash.id

    def test_unknown_container_rejected(self, db_session, book):
        service = AccountService(db_session)
        with pytest.raises(ContainerNotFoundError):
            make_account(service, 999, "Cash")


class TestGetAccount:

    def test_get_existing_account(self, db_session, book):
        service = AccountService(db_session)
        created = make_account(service, book.id, "Cash")
        db_session.commit()

        assert service.get_account(created.id).name == "Cash"

    def test_get_missing_account(self, db_session, book):
        service = AccountService(db_session)
        with pytest.raises(AccountNotFoundError, match="not found"):
            service.get_account(999)


class TestListAccounts:

    def test_creation_order(self, db_session, book):
        service = AccountService(db_session)
        for name in ("Zeta", "Alpha", "Mid"):
            make_account(service, book.id, name)
        db_session.commit()

        names = [a.name for a in service.list_accounts(book.id)]
        assert names == ["Zeta", "Alpha", "Mid"]

    def test_scoped_to_container(self, db_session, book):
        business = ContainerService(db_session).add_container(
            ContainerCreate(name="Business")
        )
        service = AccountService(db_session)
        make_account(service, book.id, "Cash")
        make_account(service, business.id, "Till")
        db_session.commit()

        assert [a.name for a in service.list_accounts(business.id)] == ["Till"]


class TestPolarity:

    @pytest.mark.parametrize("classification, expected", [
        ("asset", Polarity.DEBIT),
        ("contra_asset", Polarity.DEBIT),
        ("liability", Polarity.CREDIT),
        ("equity", Polarity.CREDIT),
    ])
    def test_account_polarity(self, db_session, book, classification, expected):
        service = AccountService(db_session)
        account = make_account(service, book.id, "Acct", classification)
        assert account.polarity == expected
