from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum


class TransactionOutcome(Enum):
    """Final state of a transaction."""

    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


class TransactionHandle(ABC):
    """A transaction begun by a TransactionProvider.

    ``outcome`` is None while the transaction is active.
    """

    @property
    @abstractmethod
    def outcome(self) -> TransactionOutcome | None:
        """COMMITTED, ROLLED_BACK, or None if still active."""


class TransactionProvider(ABC):
    """Port for atomic commit/rollback boundaries.

    Contract:
    - begin() starts a new transaction bound to the calling thread
    - commit() makes every write of the transaction visible atomically
    - rollback() discards every write of the transaction
    - Each call MAY raise an I/O-kind error, which the caller propagates
    - Isolation between accounts comes from AccountLockManager, not from here

    Repositories find the active transaction themselves; the handle is only
    passed back to commit() or rollback().
    """

    @abstractmethod
    def begin(self) -> TransactionHandle:
        """Start a transaction."""

    @abstractmethod
    def commit(self, handle: TransactionHandle) -> None:
        """Commit the transaction represented by ``handle``."""

    @abstractmethod
    def rollback(self, handle: TransactionHandle) -> None:
        """Roll back the transaction represented by ``handle``."""
