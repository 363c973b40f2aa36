"""Transactional execution of use-case work, optionally account-locked.

Ordering contract for run_locked():
    acquire lock → begin → work() → commit/rollback → release lock

Once a lock is released, the next caller admitted for that account sees
either the fully committed or the fully rolled-back prior state.
"""

from __future__ import annotations

import logging
from contextvars import ContextVar
from typing import TYPE_CHECKING, NoReturn, TypeVar

from account_core.application.exceptions import (
    ExecutionError,
    InvocationError,
    LockStateError,
)
from account_core.domain.exceptions import DomainException

if TYPE_CHECKING:
    from collections.abc import Callable

    from account_core.application.ports import (
        AccountLockManager,
        LockHandle,
        LockMode,
        TransactionHandle,
        TransactionProvider,
    )
    from account_core.config import ExecutorConfig

T = TypeVar("T")

_active_scope: ContextVar[_TransactionScope | None] = ContextVar(
    "account_core_transaction_scope", default=None
)
_held_keys: ContextVar[frozenset[str]] = ContextVar(
    "account_core_held_account_keys", default=frozenset()
)


class _TransactionScope:
    """Outermost transaction of the current call chain.

    Nested run() calls join it instead of beginning a new one. Locks taken
    by nested run_locked() calls are parked in ``deferred_releases`` so they
    are only released after this transaction commits or rolls back.
    """

    __slots__ = ("deferred_releases", "handle", "provider", "rollback_only")

    def __init__(self, provider: TransactionProvider, handle: TransactionHandle) -> None:
        self.provider = provider
        self.handle = handle
        self.rollback_only = False
        self.deferred_releases: list[LockHandle] = []


class TransactionalExecutor:
    """Runs units of work inside a transaction, optionally under an account lock.

    Responsibilities:
    - Begin, commit and roll back through the TransactionProvider
    - Acquire the account lock before begin, release it after commit/rollback
    - Pass recognized failures through, wrap everything else in InvocationError

    Recognized failures are the configured ``domain_errors`` (default:
    DomainException) plus the execution layer's own kinds (LockTimeoutError,
    LockStateError, InvocationError). LockStateError is never turned into a
    business failure.

    Nesting:
    - run() inside a transaction of the same provider joins it. A failure
      in the joined call marks the whole transaction rollback-only.
    - run_locked() on an account the call chain already holds raises
      LockStateError instead of deadlocking.
    """

    def __init__(
        self,
        lock_manager: AccountLockManager,
        transaction_provider: TransactionProvider,
        *,
        domain_errors: tuple[type[Exception], ...] = (DomainException,),
        lock_timeout: float | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._lock_manager = lock_manager
        self._transaction_provider = transaction_provider
        self._passthrough: tuple[type[Exception], ...] = (ExecutionError, *domain_errors)
        self._lock_timeout = lock_timeout
        self._logger = logger or logging.getLogger(__name__)

    @classmethod
    def from_config(
        cls,
        config: ExecutorConfig,
        lock_manager: AccountLockManager,
        transaction_provider: TransactionProvider,
        **kwargs,
    ) -> TransactionalExecutor:
        return cls(
            lock_manager,
            transaction_provider,
            lock_timeout=config.lock_timeout_seconds,
            **kwargs,
        )

    @property
    def lock_manager(self) -> AccountLockManager:
        return self._lock_manager

    def run(self, work: Callable[[], T]) -> T:
        """Run ``work`` in a transaction and return its result.

        Commits on normal return. On failure rolls back and re-raises the
        failure, wrapped in InvocationError unless it is recognized.
        """
        scope = _active_scope.get()
        if scope is not None and scope.provider is self._transaction_provider:
            return self._run_joined(scope, work)
        return self._run_new(work)

    def run_locked(
        self,
        key: str,
        mode: LockMode,
        work: Callable[[], T],
        *,
        timeout: float | None = None,
    ) -> T:
        """Run ``work`` in a transaction while holding ``mode`` on ``key``.

        Args:
            key: Account lock key.
            mode: LockMode.READ for consistent reads, LockMode.WRITE for
                  changes to account-linked state.
            work: Zero-argument callable.
            timeout: Bound on the lock wait in seconds. Defaults to the
                     executor's lock_timeout; None on both blocks until granted.

        Raises:
            LockTimeoutError: The lock was not granted in time. No
                transaction was begun.
            LockStateError: The call chain already holds ``key``.
            InvocationError: ``work`` or the provider failed unexpectedly.
        """
        held = _held_keys.get()
        if key in held:
            self._logger.error("Nested locked call on account '%s' in the same call chain", key)
            raise LockStateError(
                f"Account '{key}' is already locked by this call chain; "
                f"nested locked calls on the same account are not supported",
                key=key,
            )

        handle = self._acquire(key, mode, timeout)
        outer = _active_scope.get()
        if outer is not None and outer.provider is self._transaction_provider:
            # Joining an outer transaction: keep the lock until it finishes
            outer.deferred_releases.append(handle)
            _held_keys.set(held | {key})
            return self._run_joined(outer, work)

        held_token = _held_keys.set(held | {key})
        try:
            return self._run_new(work)
        finally:
            _held_keys.reset(held_token)
            self._lock_manager.release(handle)

    def _acquire(self, key: str, mode: LockMode, timeout: float | None) -> LockHandle:
        if timeout is None:
            timeout = self._lock_timeout
        if timeout is None:
            return self._lock_manager.acquire(key, mode)
        return self._lock_manager.try_acquire(key, mode, timeout)

    def _run_new(self, work: Callable[[], T]) -> T:
        try:
            handle = self._transaction_provider.begin()
        except Exception as e:
            self._raise_translated(e, "begin")

        scope = _TransactionScope(self._transaction_provider, handle)
        scope_token = _active_scope.set(scope)
        held_token = _held_keys.set(_held_keys.get())
        try:
            try:
                result = work()
            except BaseException as e:
                self._rollback_after_failure(handle, e)
                if isinstance(e, Exception):
                    self._raise_translated(e, "work")
                raise

            if scope.rollback_only:
                self._rollback_after_failure(handle, "marked rollback-only")
                raise InvocationError(
                    "Transaction rolled back: a nested call failed after joining it"
                )

            try:
                self._transaction_provider.commit(handle)
            except Exception as e:
                if handle.outcome is None:
                    self._rollback_after_failure(handle, e)
                self._raise_translated(e, "commit")
            return result
        finally:
            _active_scope.reset(scope_token)
            _held_keys.reset(held_token)
            self._release_deferred(scope.deferred_releases)

    def _release_deferred(self, handles: list[LockHandle]) -> None:
        """Release in reverse acquisition order; one failure does not keep the rest held."""
        first_error: Exception | None = None
        for handle in reversed(handles):
            try:
                self._lock_manager.release(handle)
            except Exception as e:
                self._logger.exception(
                    "Failed to release %s lock on '%s'", handle.mode.value, handle.key
                )
                if first_error is None:
                    first_error = e
        if first_error is not None:
            raise first_error

    def _run_joined(self, scope: _TransactionScope, work: Callable[[], T]) -> T:
        try:
            return work()
        except BaseException as e:
            scope.rollback_only = True
            if isinstance(e, Exception):
                self._raise_translated(e, "work")
            raise

    def _rollback_after_failure(self, handle: TransactionHandle, reason: object) -> None:
        self._logger.warning("Rolling back transaction: %r", reason)
        try:
            self._transaction_provider.rollback(handle)
        except Exception:
            # The failure being handled is raised, not this one
            self._logger.exception("Rollback failed")

    def _raise_translated(self, error: Exception, stage: str) -> NoReturn:
        if isinstance(error, LockStateError):
            self._logger.error("Lock state defect during %s: %s", stage, error)
            raise error
        if isinstance(error, self._passthrough):
            raise error
        self._logger.error("Unexpected failure during %s", stage, exc_info=error)
        raise InvocationError(
            f"Unexpected failure during {stage}: {error!r}", cause=error
        ) from error
