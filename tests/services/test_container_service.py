"""
Tests for the ContainerService, including the consistency lock.
"""

import pytest

from spent_ledger.errors import (
    ConsistencyError,
    ContainerNotFoundError,
    DuplicateNameError,
    ValidationError,
)
from spent_ledger.models.enums import TransactionKind
from spent_ledger.schemas.account import AccountCreate
from spent_ledger.schemas.container import ContainerCreate
from spent_ledger.schemas.transaction import TransactionCreate, TransferCreate
from spent_ledger.services.account_service import AccountService
from spent_ledger.services.container_service import ContainerService
from spent_ledger.services.transaction_service import TransactionService
from spent_ledger.services.transfer_service import TransferService


class TestContainers:

    def test_ensure_default_creates_once(self, db_session):
        service = ContainerService(db_session)
        first = service.ensure_default()
        db_session.commit()
        second = service.ensure_default()

        assert first.id == second.id
        assert first.is_default is True
        assert first.name == "Personal"
        assert len(service.list_containers()) == 1

    def test_default_listed_first(self, db_session, book):
        service = ContainerService(db_session)
        service.add_container(ContainerCreate(name="Business"))
        db_session.commit()

        assert [c.name for c in service.list_containers()] == ["Personal", "Business"]

    def test_duplicate_name_rejected(self, db_session, book):
        with pytest.raises(DuplicateNameError):
            ContainerService(db_session).add_container(ContainerCreate(name="Personal"))

    def test_blank_name_rejected(self, db_session, book):
        with pytest.raises(ValidationError):
            ContainerService(db_session).add_container(ContainerCreate(name="   "))

    def test_rename(self, db_session, book):
        service = ContainerService(db_session)
        renamed = service.rename_container(book.id, ContainerCreate(name=" Household "))
        assert renamed.name == "Household"

    def test_rename_to_taken_name(self, db_session, book):
        service = ContainerService(db_session)
        service.add_container(ContainerCreate(name="Business"))
        with pytest.raises(DuplicateNameError):
            service.rename_container(book.id, ContainerCreate(name="Business"))

    def test_unknown_container(self, db_session, book):
        with pytest.raises(ContainerNotFoundError):
            ContainerService(db_session).get_container(999)


class TestConsistencyLock:

    def _break_a_transfer(self, db_session, book):
        accounts = AccountService(db_session)
        cash = accounts.create_account(AccountCreate(
            container_id=book.id, name="Cash", classification="asset", opening_balance=1000,
        ))
        savings = accounts.create_account(AccountCreate(
            container_id=book.id, name="Savings", classification="asset",
        ))
        result = TransferService(db_session).record_transfer(TransferCreate(
            from_account_id=cash.id, to_account_id=savings.id, amount=400,
        ))
        db_session.commit()

        # Lose one leg behind the ledger's back
        db_session.delete(result.credit)
        db_session.commit()
        return cash, savings, result

    def test_clean_ledger_verifies(self, db_session, book):
        assert ContainerService(db_session).verify(book.id) == []
        assert book.needs_reconciliation is False

    def test_orphan_leg_locks_container(self, db_session, book):
        _cash, _savings, result = self._break_a_transfer(db_session, book)
        service = ContainerService(db_session)

        assert service.verify(book.id) == [result.transfer_id]
        db_session.commit()
        assert service.get_container(book.id).needs_reconciliation is True

    def test_locked_container_refuses_writes(self, db_session, book):
        cash, savings, _result = self._break_a_transfer(db_session, book)
        ContainerService(db_session).verify(book.id)
        db_session.commit()

        with pytest.raises(ConsistencyError) as excinfo:
            TransactionService(db_session).record_transaction(TransactionCreate(
                account_id=cash.id, amount=100,
                kind=TransactionKind.EXPENSE, category="Other",
            ))
        assert excinfo.value.container_id == book.id

        with pytest.raises(ConsistencyError):
            TransferService(db_session).record_transfer(TransferCreate(
                from_account_id=cash.id, to_account_id=savings.id, amount=100,
            ))
        with pytest.raises(ConsistencyError):
            AccountService(db_session).create_account(AccountCreate(
                container_id=book.id, name="Wallet", classification="asset",
            ))

    def test_reads_still_work_while_locked(self, db_session, book):
        cash, _savings, _result = self._break_a_transfer(db_session, book)
        ContainerService(db_session).verify(book.id)
        db_session.commit()

        txns = TransactionService(db_session).get_transactions_by_account(book.id, cash.id)
        assert len(txns) == 1

    def test_reconcile_requires_clean_ledger(self, db_session, book):
        cash, _savings, result = self._break_a_transfer(db_session, book)
        service = ContainerService(db_session)
        service.verify(book.id)
        db_session.commit()

        with pytest.raises(ConsistencyError):
            service.mark_reconciled(book.id)

        db_session.delete(result.debit)
        db_session.commit()

        container = service.mark_reconciled(book.id)
        db_session.commit()
        assert container.needs_reconciliation is False

        txn = TransactionService(db_session).record_transaction(TransactionCreate(
            account_id=cash.id, amount=100,
            kind=TransactionKind.EXPENSE, category="Other",
        ))
        assert txn.amount == -100
