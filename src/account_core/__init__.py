"""Account-scoped locking and transactional execution for account use cases."""

from account_core.application.exceptions import (
    ExecutionError,
    InvalidLockKeyError,
    InvocationError,
    LockStateError,
    LockTimeoutError,
)
from account_core.application.executor import TransactionalExecutor
from account_core.application.ports import AccountLockManager, LockHandle, LockMode
from account_core.infrastructure.lock_manager import InMemoryAccountLockManager

__version__ = "0.1.0"

__all__ = [
    "AccountLockManager",
    "ExecutionError",
    "InMemoryAccountLockManager",
    "InvalidLockKeyError",
    "InvocationError",
    "LockHandle",
    "LockMode",
    "LockStateError",
    "LockTimeoutError",
    "TransactionalExecutor",
]
