from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

if TYPE_CHECKING:
    from collections.abc import Iterator


class LockMode(Enum):
    """Access level requested for an account key.

    READ is shared: any number of READ holders may coexist.
    WRITE is exclusive against every other holder, READ or WRITE.
    """

    READ = "read"
    WRITE = "write"


@dataclass(frozen=True, slots=True)
class LockHandle:
    """Opaque token for one granted acquisition.

    Only the handle returned by acquire() can release that acquisition.
    Two acquisitions of the same key and mode yield distinct handles.
    """

    key: str
    mode: LockMode
    token: UUID = field(default_factory=uuid4)


class AccountLockManager(ABC):
    """Port for account-scoped READ/WRITE locking.

    Contract:
    - acquire() MUST block until the lock can be granted
    - WRITE on a key MUST exclude every other holder of that key
    - READ on a key MAY be shared with other READ holders
    - Waiters on a key MUST be granted in arrival order; a READ request
      never overtakes a WRITE request that is already waiting
    - Different keys MUST NOT block each other
    - release() of a handle that is not currently held MUST raise
      LockStateError and leave holder state untouched

    The manager is NOT reentrant. Acquiring a key that the same call chain
    already holds deadlocks a WRITE request; callers must not nest locked
    calls on the same account.
    """

    @abstractmethod
    def acquire(self, key: str, mode: LockMode) -> LockHandle:
        """Block until ``mode`` is granted on ``key``.

        Args:
            key: Non-empty account key (e.g., AccountId.lock_key).
            mode: Requested access level.

        Returns:
            The handle identifying this acquisition.

        Raises:
            InvalidLockKeyError: If key is empty or not a string.
        """

    @abstractmethod
    def try_acquire(self, key: str, mode: LockMode, timeout: float) -> LockHandle:
        """Like acquire(), but give up after ``timeout`` seconds.

        Raises:
            LockTimeoutError: If the lock was not granted in time.
            InvalidLockKeyError: If key is empty or not a string.
        """

    @abstractmethod
    def release(self, handle: LockHandle) -> None:
        """Release exactly the acquisition represented by ``handle``.

        Raises:
            LockStateError: If the handle is not currently held.
        """

    @contextmanager
    def locked(
        self, key: str, mode: LockMode, timeout: float | None = None
    ) -> Iterator[LockHandle]:
        """Scoped acquisition: the lock is released on every exit path.

        Usage:
            with lock_manager.locked("acct-1", LockMode.WRITE):
                # Critical section - lock is held
                ...
            # Lock is released here
        """
        if timeout is None:
            handle = self.acquire(key, mode)
        else:
            handle = self.try_acquire(key, mode, timeout)
        try:
            yield handle
        finally:
            self.release(handle)
