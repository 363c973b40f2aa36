from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

from account_core.application.ports import LockMode
from account_core.application.use_cases.support import UseCaseSupport
from account_core.domain.exceptions import AccountNotFoundError, CashInOutNotFoundError

if TYPE_CHECKING:
    from datetime import datetime

    from account_core.application.executor import TransactionalExecutor
    from account_core.application.ports import (
        AccountRepository,
        CashInOutRepository,
        TimeProvider,
    )
    from account_core.domain.entities import Account, CashInOut
    from account_core.domain.value_objects import AccountId, CashInOutId


@dataclass(frozen=True, slots=True)
class SettleCashOutRequest:
    """Input DTO for process and cancel cash out use cases."""

    account_id: AccountId
    cash_out_id: CashInOutId


@dataclass(frozen=True, slots=True)
class SettleCashOutResponse:
    """Output DTO for process and cancel cash out use cases."""

    cash_out: CashInOut
    account: Account


class _SettleCashOutUseCase(UseCaseSupport, ABC):
    def __init__(
        self,
        executor: TransactionalExecutor,
        time_provider: TimeProvider,
        account_repository: AccountRepository,
        cash_in_out_repository: CashInOutRepository,
        logger: logging.Logger | None = None,
    ) -> None:
        super().__init__(executor, logger)
        self._time_provider = time_provider
        self._account_repo = account_repository
        self._cash_in_out_repo = cash_in_out_repository

    def execute(self, request: SettleCashOutRequest) -> SettleCashOutResponse:
        return self.tx_locked(
            request.account_id,
            LockMode.WRITE,
            lambda: self._settle_within_lock(request),
        )

    def _settle_within_lock(self, request: SettleCashOutRequest) -> SettleCashOutResponse:
        now = self._time_provider.now()

        cash_out = self._cash_in_out_repo.get(request.cash_out_id)
        # A request of another account is reported as missing: it is not
        # protected by the lock held here
        if cash_out is None or cash_out.account_id != request.account_id or not cash_out.withdrawal:
            raise CashInOutNotFoundError(
                f"Withdrawal {request.cash_out_id.value} not found "
                f"for account {request.account_id.value}"
            )

        account = self._account_repo.get(request.account_id)
        if account is None:
            raise AccountNotFoundError(f"Account not found: {request.account_id.value}")

        return self._settle(cash_out, account, now)

    @abstractmethod
    def _settle(
        self, cash_out: CashInOut, account: Account, now: datetime
    ) -> SettleCashOutResponse:
        """Apply the status change and persist it."""


class ProcessCashOutUseCase(_SettleCashOutUseCase):
    """Settles a PROCESSING withdrawal: debits the balance, marks it PROCESSED.

    Raises:
        CashInOutNotFoundError: No withdrawal with that ID on the account.
        InvalidStateTransitionError: Withdrawal is not PROCESSING.
        InsufficientFundsError: Balance no longer covers the amount.
    """

    def _settle(
        self, cash_out: CashInOut, account: Account, now: datetime
    ) -> SettleCashOutResponse:
        processed = cash_out.process(now)
        debited = account.withdraw(cash_out.amount_cents)

        self._cash_in_out_repo.save(processed)
        self._account_repo.save(debited)

        self._logger.info(
            "Processed withdrawal %s: account %s balance_cents=%s",
            cash_out.id.value,
            account.id.value,
            debited.balance_cents,
        )
        return SettleCashOutResponse(cash_out=processed, account=debited)


class CancelCashOutUseCase(_SettleCashOutUseCase):
    """Cancels a PROCESSING withdrawal, releasing its reserved amount.

    Raises:
        CashInOutNotFoundError: No withdrawal with that ID on the account.
        InvalidStateTransitionError: Withdrawal is not PROCESSING.
    """

    def _settle(
        self, cash_out: CashInOut, account: Account, now: datetime
    ) -> SettleCashOutResponse:
        cancelled = cash_out.cancel(now)
        self._cash_in_out_repo.save(cancelled)

        self._logger.info("Cancelled withdrawal %s", cash_out.id.value)
        return SettleCashOutResponse(cash_out=cancelled, account=account)
