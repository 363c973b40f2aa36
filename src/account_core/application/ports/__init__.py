"""Ports - Abstract interfaces for external dependencies.

Ports define the contracts that infrastructure adapters must implement.
This allows the application layer to remain decoupled from concrete implementations.
"""

from account_core.application.ports.account_repository import AccountRepository
from account_core.application.ports.cash_in_out_repository import CashInOutRepository
from account_core.application.ports.cash_out_notifier import CashOutNotifier
from account_core.application.ports.lock_manager import AccountLockManager, LockHandle, LockMode
from account_core.application.ports.time_provider import TimeProvider
from account_core.application.ports.transaction_provider import (
    TransactionHandle,
    TransactionOutcome,
    TransactionProvider,
)

__all__ = [
    "AccountLockManager",
    "AccountRepository",
    "CashInOutRepository",
    "CashOutNotifier",
    "LockHandle",
    "LockMode",
    "TimeProvider",
    "TransactionHandle",
    "TransactionOutcome",
    "TransactionProvider",
]
