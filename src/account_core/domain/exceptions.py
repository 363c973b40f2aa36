"""Domain exceptions for account-core.

Exception hierarchy:
    DomainException (base)
    ├── State & Transition Errors
    │   ├── InvalidStateTransitionError
    │   └── InsufficientFundsError
    ├── Not Found Errors
    │   ├── AccountNotFoundError
    │   └── CashInOutNotFoundError
    └── Validation Errors
        ├── InvalidAccountIdError
        ├── InvalidCashInOutIdError
        └── InvalidAmountError

Domain exceptions are business-rule rejections. The transactional executor
passes them through unchanged; everything else raised inside a unit of work
is reported as an InvocationError.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base exception for all domain-level errors.

    All domain exceptions inherit from this class to enable
    catching domain errors distinctly from infrastructure errors.
    """


# =============================================================================
# State & Transition Errors
# =============================================================================


class InvalidStateTransitionError(DomainException):
    """Raised when a cash transfer status change is not allowed.

    Valid transitions:
        - processing → processed
        - processing → cancelled

    processed and cancelled are terminal.
    """


class InsufficientFundsError(DomainException):
    """Raised when a withdrawal exceeds the withdrawable balance.

    The withdrawable balance is the account balance minus every
    withdrawal request still in PROCESSING state.
    """


# =============================================================================
# Not Found Errors
# =============================================================================


class AccountNotFoundError(DomainException):
    """Raised when an account cannot be found by ID."""


class CashInOutNotFoundError(DomainException):
    """Raised when a cash transfer request cannot be found by ID."""


# =============================================================================
# Validation Errors
# =============================================================================


class InvalidAccountIdError(DomainException):
    """Raised when an account ID fails validation.

    AccountId must be non-empty, at most 32 chars, charset [A-Za-z0-9-_].
    """


class InvalidCashInOutIdError(DomainException):
    """Raised when a cash transfer ID is not a valid UUID."""


class InvalidAmountError(DomainException):
    """Raised when amount_cents fails validation.

    Deposit and withdrawal amounts must be greater than 0.
    """
