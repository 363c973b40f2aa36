"""Shared pytest fixtures for the test suite."""

from datetime import UTC, datetime

import pytest

from account_core.application.executor import TransactionalExecutor
from account_core.domain.entities import Account
from account_core.domain.value_objects import AccountId
from account_core.infrastructure.account_repository import InMemoryAccountRepository
from account_core.infrastructure.cash_in_out_repository import InMemoryCashInOutRepository
from account_core.infrastructure.cash_out_notifier import InMemoryCashOutNotifier
from account_core.infrastructure.lock_manager import InMemoryAccountLockManager
from account_core.infrastructure.time_provider import FixedTimeProvider
from account_core.infrastructure.transaction_provider import (
    InMemoryDatabase,
    InMemoryTransactionProvider,
)


@pytest.fixture
def fixed_time() -> datetime:
    """A fixed timestamp for deterministic testing."""
    return datetime(2024, 1, 15, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def time_provider(fixed_time: datetime) -> FixedTimeProvider:
    """A time provider with a fixed timestamp."""
    return FixedTimeProvider(fixed_time)


@pytest.fixture
def lock_manager() -> InMemoryAccountLockManager:
    """An in-memory account lock manager for testing."""
    return InMemoryAccountLockManager()


@pytest.fixture
def database() -> InMemoryDatabase:
    return InMemoryDatabase()


@pytest.fixture
def transaction_provider(database: InMemoryDatabase) -> InMemoryTransactionProvider:
    return InMemoryTransactionProvider(database)


@pytest.fixture
def executor(
    lock_manager: InMemoryAccountLockManager,
    transaction_provider: InMemoryTransactionProvider,
) -> TransactionalExecutor:
    return TransactionalExecutor(lock_manager, transaction_provider)


@pytest.fixture
def account_repository(database: InMemoryDatabase) -> InMemoryAccountRepository:
    return InMemoryAccountRepository(database)


@pytest.fixture
def cash_in_out_repository(database: InMemoryDatabase) -> InMemoryCashInOutRepository:
    return InMemoryCashInOutRepository(database)


@pytest.fixture
def notifier() -> InMemoryCashOutNotifier:
    return InMemoryCashOutNotifier()


@pytest.fixture
def account_id() -> AccountId:
    return AccountId(value="acct-1")


@pytest.fixture
def account(account_id: AccountId, account_repository: InMemoryAccountRepository) -> Account:
    """An account with balance 100 cents, saved outside any transaction."""
    opened = Account.open(account_id, balance_cents=100)
    account_repository.save(opened)
    return opened
