"""Execution-layer exceptions for account-core.

Exception hierarchy:
    ExecutionError (base)
    ├── LockTimeoutError  (recoverable, caller may retry)
    ├── LockStateError    (programming defect, never retried)
    └── InvocationError   (unexpected failure, wraps the cause)

    InvalidLockKeyError (ValueError)

These are deliberately NOT DomainException subclasses: a lock defect or an
unexpected failure must stay distinguishable from a business-rule rejection.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from account_core.application.ports.lock_manager import LockMode


class ExecutionError(Exception):
    """Base exception for failures raised by the execution layer itself."""


class LockTimeoutError(ExecutionError):
    """Raised when a bounded lock acquisition is not granted in time.

    No transaction was begun and no state was changed. Recoverable:
    the caller may retry.
    """

    def __init__(self, key: str, mode: LockMode, timeout: float) -> None:
        self.key = key
        self.mode = mode
        self.timeout = timeout
        super().__init__(
            f"Timed out after {timeout}s waiting for {mode.value} lock on account '{key}'"
        )


class LockStateError(ExecutionError):
    """Raised on lock misuse or a detected lock invariant violation.

    Examples:
        - releasing a handle twice
        - releasing a handle issued by another manager
        - re-acquiring an account already locked by the same call chain

    This is a programming defect, not a business condition. It must
    abort the operation and surface loudly.
    """

    def __init__(self, message: str, key: str | None = None) -> None:
        self.key = key
        super().__init__(message)


class InvocationError(ExecutionError):
    """Raised when a unit of work fails with an unrecognized exception.

    The original exception is available as ``cause`` (and ``__cause__``).
    Boundary callers branch on this single kind instead of an open set
    of internal failure types.
    """

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        self.cause = cause
        super().__init__(message)


class InvalidLockKeyError(ValueError):
    """Raised when an account lock key is not a non-empty string."""
