from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from account_core.application.ports import LockMode
from account_core.application.use_cases.support import UseCaseSupport
from account_core.domain.entities import CashInOut, CashInOutStatus
from account_core.domain.exceptions import (
    AccountNotFoundError,
    InsufficientFundsError,
    InvalidAmountError,
)

if TYPE_CHECKING:
    from account_core.application.executor import TransactionalExecutor
    from account_core.application.ports import (
        AccountRepository,
        CashInOutRepository,
        CashOutNotifier,
        TimeProvider,
    )
    from account_core.domain.value_objects import AccountId


@dataclass(frozen=True, slots=True)
class RegisterCashOutRequest:
    """Input DTO for register cash out use case."""

    account_id: AccountId
    amount_cents: int


@dataclass(frozen=True, slots=True)
class RegisterCashOutResponse:
    """Output DTO for register cash out use case."""

    cash_out: CashInOut
    withdrawable_cents: int  # Remaining after this request


class RegisterCashOutUseCase(UseCaseSupport):
    """Registers a withdrawal request against an account.

    Responsibilities:
    - Acquire the account WRITE lock and a transaction
    - Fetch current time inside lock
    - Check the withdrawable balance (balance minus pending withdrawals)
    - Persist the PROCESSING request
    - Notify only after the transaction committed

    The balance itself is debited later by ProcessCashOutUseCase.
    """

    def __init__(
        self,
        executor: TransactionalExecutor,
        time_provider: TimeProvider,
        account_repository: AccountRepository,
        cash_in_out_repository: CashInOutRepository,
        notifier: CashOutNotifier,
        logger: logging.Logger | None = None,
    ) -> None:
        super().__init__(executor, logger)
        self._time_provider = time_provider
        self._account_repo = account_repository
        self._cash_in_out_repo = cash_in_out_repository
        self._notifier = notifier

    def execute(self, request: RegisterCashOutRequest) -> RegisterCashOutResponse:
        """Execute the registration.

        Raises:
            InvalidAmountError: amount_cents <= 0.
            AccountNotFoundError: Account does not exist.
            InsufficientFundsError: Request exceeds the withdrawable balance.
        """
        response = self.tx_locked(
            request.account_id,
            LockMode.WRITE,
            lambda: self._register_within_lock(request),
        )
        self._logger.info(
            "Registered withdrawal %s for account %s",
            response.cash_out.id.value,
            request.account_id.value,
        )

        # Lock released and transaction committed at this point
        try:
            self._notifier.notify_registered(response.cash_out)
        except Exception:
            self._logger.exception(
                "Failed to send withdrawal notification for %s", response.cash_out.id.value
            )
        return response

    def _register_within_lock(self, request: RegisterCashOutRequest) -> RegisterCashOutResponse:
        if request.amount_cents <= 0:
            raise InvalidAmountError(
                f"Withdrawal amount must be greater than 0, got {request.amount_cents}"
            )

        now = self._time_provider.now()

        account = self._account_repo.get(request.account_id)
        if account is None:
            raise AccountNotFoundError(f"Account not found: {request.account_id.value}")

        pending = self._cash_in_out_repo.find_by_account(
            request.account_id, CashInOutStatus.PROCESSING
        )
        reserved_cents = sum(row.amount_cents for row in pending if row.withdrawal)
        withdrawable_cents = account.balance_cents - reserved_cents
        if request.amount_cents > withdrawable_cents:
            raise InsufficientFundsError(
                f"Account {request.account_id.value} can withdraw at most "
                f"amount_cents={withdrawable_cents}, requested amount_cents={request.amount_cents}"
            )

        cash_out = CashInOut.request(
            account_id=request.account_id,
            amount_cents=request.amount_cents,
            withdrawal=True,
            requested_at=now,
        )
        self._cash_in_out_repo.save(cash_out)

        return RegisterCashOutResponse(
            cash_out=cash_out,
            withdrawable_cents=withdrawable_cents - request.amount_cents,
        )
