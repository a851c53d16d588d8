"""Shared pytest fixtures for saldo tests."""

import itertools
import tempfile
import os
from datetime import date
from decimal import Decimal

import pytest

from saldo.database.factories import create_sqlite_store
from saldo.domain.account import AccountService
from saldo.domain.balance_sheet import BalanceSheetService
from saldo.domain.entities import (
    FIXED_FLOWS,
    INDEFINITE,
    Record,
    RecordKind,
    Recurrence,
    Until,
)
from saldo.domain.record import RecordService

USER = "alice"


def _as_bound(value):
    if value is None:
        return INDEFINITE
    if isinstance(value, date):
        return Until(date=value)
    return value


@pytest.fixture
def make_record():
    """Build in-memory records without touching the store.

    Dates may be given as plain dates (day precision) or as bounds.
    """
    ids = itertools.count(1)

    def factory(
        kind="plain",
        amount="100",
        flow=None,
        recurring=False,
        start=None,
        end=None,
        execution=None,
        probability=None,
        account_id=None,
        description="",
    ):
        if flow is None:
            try:
                flow = FIXED_FLOWS[RecordKind(kind)].value
            except (KeyError, ValueError):
                flow = "expense"
        return Record(
            id=next(ids),
            kind=kind,
            flow=flow,
            amount=Decimal(amount),
            recurrence=Recurrence(
                is_recurring=recurring, start=_as_bound(start), end=_as_bound(end)
            ),
            description=description,
            account_id=account_id,
            execution_date=_as_bound(execution),
            probability=probability,
        )

    return factory


@pytest.fixture
def temp_store():
    """Create a temporary record store for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    store = create_sqlite_store(database_path=db_path)
    # Store the path for tests that need it
    store.database_path = db_path
    store.connect()
    store.initialize_schema()

    yield store

    store.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def account_service(temp_store):
    """Create an AccountService with a temporary store."""
    return AccountService(temp_store)


@pytest.fixture
def record_service(temp_store):
    """Create a RecordService with a temporary store."""
    return RecordService(temp_store)


@pytest.fixture
def balance_sheet_service(temp_store):
    """Create a BalanceSheetService with a temporary store."""
    return BalanceSheetService(temp_store)


@pytest.fixture
def default_accounts(account_service):
    """Create the default accounts and return them keyed by kind."""
    account_service.ensure_default_accounts(USER)
    return {acc.kind: acc for acc in account_service.list_accounts(USER)}


@pytest.fixture
def piggy_bank(account_service):
    """Create a sample piggy bank for testing."""
    account_id = account_service.create_piggy_bank(USER, "Holidays")
    return account_service.get_account(USER, account_id)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
