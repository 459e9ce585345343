"""
Tests for the BalanceService.
"""

from datetime import datetime

import pytest

from spent_ledger.errors import AccountNotFoundError
from spent_ledger.models.enums import TransactionKind
from spent_ledger.schemas.account import AccountCreate
from spent_ledger.schemas.transaction import TransactionCreate, TransferCreate
from spent_ledger.services.account_service import AccountService
from spent_ledger.services.balance_service import BalanceService
from spent_ledger.services.transaction_service import TransactionService
from spent_ledger.services.transfer_service import TransferService


def make_account(db_session, container_id, name, classification="asset", opening=0):
    return AccountService(db_session).create_account(AccountCreate(
        container_id=container_id,
        name=name,
        classification=classification,
        opening_balance=opening,
    ))


def record(db_session, account, amount, kind, date=None, category="Other"):
    return TransactionService(db_session).record_transaction(TransactionCreate(
        account_id=account.id, amount=amount, kind=kind,
        category=category, date=date,
    ))


class TestCurrentBalance:

    def test_new_account_balance_is_opening(self, db_session, book):
        cash = make_account(db_session, book.id, "Cash", opening=100000)
        db_session.commit()
        assert BalanceService(db_session).current_balance(cash.id) == 100000

    def test_balance_is_opening_plus_stored_amounts(self, db_session, book):
        cash = make_account(db_session, book.id, "Cash", opening=5000)
        savings = make_account(db_session, book.id, "Savings")
        record(db_session, cash, 1200, TransactionKind.EXPENSE)
        record(db_session, cash, 30000, TransactionKind.INCOME, category="Income")
        TransferService(db_session).record_transfer(TransferCreate(
            from_account_id=cash.id, to_account_id=savings.id, amount=4000,
        ))
        db_session.commit()

        service = BalanceService(db_session)
        txns = TransactionService(db_session).get_transactions_by_account(
            book.id, cash.id
        )
        assert service.current_balance(cash.id) == 5000 + sum(t.amount for t in txns)
        assert service.current_balance(cash.id) == 5000 - 1200 + 30000 - 4000

    def test_liability_expense_increases_balance(self, db_session, book):
        card = make_account(db_session, book.id, "Card", "liability")
        record(db_session, card, 7500, TransactionKind.EXPENSE)
        db_session.commit()

        assert BalanceService(db_session).current_balance(card.id) == 7500

    def test_balance_is_idempotent(self, db_session, book):
        cash = make_account(db_session, book.id, "Cash", opening=100)
        record(db_session, cash, 40, TransactionKind.EXPENSE)
        db_session.commit()

        service = BalanceService(db_session)
        assert service.current_balance(cash.id) == service.current_balance(cash.id)

    def test_unknown_account(self, db_session, book):
        with pytest.raises(AccountNotFoundError):
            BalanceService(db_session).current_balance(999)


class TestBalanceAsOf:

    def test_ignores_later_transactions(self, db_session, book):
        cash = make_account(db_session, book.id, "Cash", opening=1000)
        record(db_session, cash, 100, TransactionKind.EXPENSE, datetime(2024, 1, 10))
        record(db_session, cash, 200, TransactionKind.EXPENSE, datetime(2024, 2, 10))
        db_session.commit()

        service = BalanceService(db_session)
        assert service.balance_as_of(cash.id, datetime(2024, 1, 31)) == 900
        assert service.balance_as_of(cash.id, datetime(2024, 2, 10)) == 700


class TestAccountBalances:

    def test_lists_every_account_by_name(self, db_session, book):
        make_account(db_session, book.id, "Wallet", opening=300)
        idle = make_account(db_session, book.id, "Idle")
        bank = make_account(db_session, book.id, "Bank", opening=1000)
        record(db_session, bank, 250, TransactionKind.EXPENSE)
        db_session.commit()

        balances = BalanceService(db_session).account_balances(book.id)
        assert [b.name for b in balances] == ["Bank", "Idle", "Wallet"]
        assert [b.balance for b in balances] == [750, 0, 300]
        assert balances[1].id == idle.id
