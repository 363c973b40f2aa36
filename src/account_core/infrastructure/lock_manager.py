from __future__ import annotations

import logging
import math
import threading
from collections import deque
from dataclasses import dataclass
from typing import TYPE_CHECKING

from account_core.application.exceptions import (
    InvalidLockKeyError,
    LockStateError,
    LockTimeoutError,
)
from account_core.application.ports import AccountLockManager, LockHandle, LockMode

if TYPE_CHECKING:
    from uuid import UUID

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LockStatus:
    """Point-in-time view of one key's lock entry, for diagnostics and tests."""

    readers: int
    writer: bool
    waiting: int

    @property
    def is_free(self) -> bool:
        return self.readers == 0 and not self.writer


_FREE = LockStatus(readers=0, writer=False, waiting=0)


class _Ticket:
    """A pending acquisition waiting in a key's FIFO queue."""

    __slots__ = ("granted", "handle")

    def __init__(self, handle: LockHandle) -> None:
        self.handle = handle
        self.granted = False


class _LockEntry:
    """Lock state for one account key.

    Every field is guarded by ``condition``. Grants are handed out by
    whoever changes the state (an arriving request or a release), strictly
    from the head of ``waiters``; a waiting thread only observes that its
    ticket was granted.
    """

    def __init__(self, key: str) -> None:
        self.key = key
        self.condition = threading.Condition(threading.Lock())
        self.readers = 0
        self.writer = False
        self.waiters: deque[_Ticket] = deque()
        self.held: dict[UUID, LockHandle] = {}

    def grant_from_head(self) -> None:
        granted = False
        while self.waiters:
            ticket = self.waiters[0]
            if ticket.handle.mode is LockMode.WRITE:
                if self.writer or self.readers:
                    break
                self.writer = True
            else:
                # A READ behind a waiting WRITE stays queued (no writer starvation)
                if self.writer:
                    break
                self.readers += 1
            self.waiters.popleft()
            self.held[ticket.handle.token] = ticket.handle
            ticket.granted = True
            granted = True

        self.check_invariant()
        if granted:
            self.condition.notify_all()

    def release(self, handle: LockHandle) -> None:
        if self.held.get(handle.token) != handle:
            raise LockStateError(
                f"Lock handle {handle.token} for account '{handle.key}' is not held "
                f"(double release or foreign handle)",
                key=handle.key,
            )
        del self.held[handle.token]
        if handle.mode is LockMode.WRITE:
            self.writer = False
        else:
            self.readers -= 1
        self.grant_from_head()

    def abandon(self, ticket: _Ticket) -> None:
        self.waiters.remove(ticket)
        # The abandoned ticket may have been blocking compatible waiters behind it
        self.grant_from_head()

    def check_invariant(self) -> None:
        holders = self.readers + int(self.writer)
        if self.readers < 0 or (self.writer and self.readers) or len(self.held) != holders:
            raise LockStateError(
                f"Lock invariant violated for account '{self.key}': "
                f"readers={self.readers}, writer={self.writer}, held={len(self.held)}",
                key=self.key,
            )

    def status(self) -> LockStatus:
        return LockStatus(readers=self.readers, writer=self.writer, waiting=len(self.waiters))


class InMemoryAccountLockManager(AccountLockManager):
    """In-memory READ/WRITE lock manager keyed by account.

    Implementation uses two levels of synchronization:
    1. A registry lock, taken only to insert the entry for a key seen for
       the first time (insert-if-absent)
    2. A per-key condition that guards holder counts and the FIFO queue

    This pattern ensures:
    - Exactly one entry per key, even under concurrent first access
    - Steady-state acquire/release never touches the registry lock
    - Per-account parallelism (different keys lock independently)
    - FIFO grants: a READ arriving after a waiting WRITE queues behind it

    Limitations:
    - Single-process only (locks don't work across processes)
    - Entries are never evicted; key cardinality must be bounded
    - Not reentrant: a call chain must not acquire a key it already holds
    """

    def __init__(self) -> None:
        self._entries: dict[str, _LockEntry] = {}
        self._registry_lock = threading.Lock()

    def acquire(self, key: str, mode: LockMode) -> LockHandle:
        return self._acquire(key, mode, timeout=None)

    def try_acquire(self, key: str, mode: LockMode, timeout: float) -> LockHandle:
        if not math.isfinite(timeout) or timeout < 0:
            raise ValueError(f"timeout must be a finite number >= 0, got {timeout}")
        return self._acquire(key, mode, timeout=timeout)

    def release(self, handle: LockHandle) -> None:
        entry = self._entries.get(handle.key)
        if entry is None:
            logger.error("Release of unknown account lock '%s'", handle.key)
            raise LockStateError(
                f"No lock was ever acquired for account '{handle.key}'", key=handle.key
            )

        with entry.condition:
            try:
                entry.release(handle)
            except LockStateError:
                logger.exception(
                    "Invalid release of %s lock on '%s'", handle.mode.value, handle.key
                )
                raise
        logger.debug("Released %s lock on '%s'", handle.mode.value, handle.key)

    def status(self, key: str) -> LockStatus:
        """Return the current holders and queue length for ``key``."""
        entry = self._entries.get(key)
        if entry is None:
            return _FREE
        with entry.condition:
            return entry.status()

    def is_locked(self, key: str) -> bool:
        return not self.status(key).is_free

    def _acquire(self, key: str, mode: LockMode, timeout: float | None) -> LockHandle:
        _validate_key(key)
        entry = self._get_or_create_entry(key)
        ticket = _Ticket(LockHandle(key=key, mode=mode))

        with entry.condition:
            entry.waiters.append(ticket)
            entry.grant_from_head()
            if not ticket.granted:
                logger.debug("Waiting for %s lock on '%s'", mode.value, key)
                try:
                    granted = entry.condition.wait_for(lambda: ticket.granted, timeout)
                except BaseException:
                    # The interrupted waiter never uses its grant or queue slot
                    if ticket.granted:
                        entry.release(ticket.handle)
                    else:
                        entry.abandon(ticket)
                    raise
                if not granted:
                    entry.abandon(ticket)
                    logger.warning(
                        "Timed out after %ss waiting for %s lock on '%s'", timeout, mode.value, key
                    )
                    raise LockTimeoutError(key, mode, timeout)

        logger.debug("Granted %s lock on '%s'", mode.value, key)
        return ticket.handle

    def _get_or_create_entry(self, key: str) -> _LockEntry:
        # Phase 1: lock-free lookup for keys that already have an entry
        entry = self._entries.get(key)
        if entry is not None:
            return entry

        # Phase 2: insert-if-absent under the registry lock
        with self._registry_lock:
            if key not in self._entries:
                self._entries[key] = _LockEntry(key)
            return self._entries[key]


def _validate_key(key: str) -> None:
    if not isinstance(key, str) or not key:
        raise InvalidLockKeyError(f"Account lock key must be a non-empty string, got {key!r}")
