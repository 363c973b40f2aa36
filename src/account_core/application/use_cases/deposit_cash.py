from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from account_core.application.ports import LockMode
from account_core.application.use_cases.support import UseCaseSupport
from account_core.domain.exceptions import AccountNotFoundError

if TYPE_CHECKING:
    from account_core.application.executor import TransactionalExecutor
    from account_core.application.ports import AccountRepository
    from account_core.domain.entities import Account
    from account_core.domain.value_objects import AccountId


@dataclass(frozen=True, slots=True)
class DepositCashRequest:
    """Input DTO for deposit cash use case."""

    account_id: AccountId
    amount_cents: int


@dataclass(frozen=True, slots=True)
class DepositCashResponse:
    """Output DTO for deposit cash use case."""

    account: Account


class DepositCashUseCase(UseCaseSupport):
    """Credits cash to an account balance.

    Runs under the account's WRITE lock, so concurrent deposits on one
    account are applied one after another and none is lost.
    """

    def __init__(
        self,
        executor: TransactionalExecutor,
        account_repository: AccountRepository,
        logger: logging.Logger | None = None,
    ) -> None:
        super().__init__(executor, logger)
        self._account_repo = account_repository

    def execute(self, request: DepositCashRequest) -> DepositCashResponse:
        """Execute the deposit.

        Raises:
            AccountNotFoundError: Account does not exist.
            InvalidAmountError: amount_cents <= 0.
        """
        account = self.tx_locked(
            request.account_id,
            LockMode.WRITE,
            lambda: self._deposit_within_lock(request),
        )
        self._logger.info(
            "Deposited amount_cents=%s to account %s",
            request.amount_cents,
            request.account_id.value,
        )
        return DepositCashResponse(account=account)

    def _deposit_within_lock(self, request: DepositCashRequest) -> Account:
        account = self._account_repo.get(request.account_id)
        if account is None:
            raise AccountNotFoundError(f"Account not found: {request.account_id.value}")

        updated = account.deposit(request.amount_cents)
        self._account_repo.save(updated)
        return updated
