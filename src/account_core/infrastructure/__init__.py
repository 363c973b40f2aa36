"""Infrastructure layer - Concrete implementations of ports.

This layer contains:
- Locking: In-memory READ/WRITE account lock manager
- Transactions: In-memory database with write-set buffered transactions
- Persistence: Repositories over the in-memory database
- Time Provider: Clock abstraction for testability
- Notifier: Post-commit side effects

Infrastructure adapters implement the ports defined in the application layer.
"""

from account_core.infrastructure.account_repository import InMemoryAccountRepository
from account_core.infrastructure.cash_in_out_repository import InMemoryCashInOutRepository
from account_core.infrastructure.cash_out_notifier import InMemoryCashOutNotifier
from account_core.infrastructure.lock_manager import InMemoryAccountLockManager, LockStatus
from account_core.infrastructure.time_provider import FixedTimeProvider, SystemTimeProvider
from account_core.infrastructure.transaction_provider import (
    InMemoryDatabase,
    InMemoryTransaction,
    InMemoryTransactionProvider,
)

__all__ = [
    "FixedTimeProvider",
    "InMemoryAccountLockManager",
    "InMemoryAccountRepository",
    "InMemoryCashInOutRepository",
    "InMemoryCashOutNotifier",
    "InMemoryDatabase",
    "InMemoryTransaction",
    "InMemoryTransactionProvider",
    "LockStatus",
    "SystemTimeProvider",
]
