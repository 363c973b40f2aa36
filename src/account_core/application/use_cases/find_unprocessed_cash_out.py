from __future__ import annotations

from typing import TYPE_CHECKING

from account_core.application.ports import LockMode
from account_core.application.use_cases.support import UseCaseSupport
from account_core.domain.entities import CashInOutStatus

if TYPE_CHECKING:
    import logging

    from account_core.application.executor import TransactionalExecutor
    from account_core.application.ports import CashInOutRepository
    from account_core.domain.entities import CashInOut
    from account_core.domain.value_objects import AccountId


class FindUnprocessedCashOutUseCase(UseCaseSupport):
    """Lists an account's withdrawal requests still in PROCESSING state.

    Takes the account READ lock: concurrent lookups proceed together, but
    never interleave with a registration or settlement on the account.
    """

    def __init__(
        self,
        executor: TransactionalExecutor,
        cash_in_out_repository: CashInOutRepository,
        logger: logging.Logger | None = None,
    ) -> None:
        super().__init__(executor, logger)
        self._cash_in_out_repo = cash_in_out_repository

    def execute(self, account_id: AccountId) -> list[CashInOut]:
        return self.tx_locked(
            account_id,
            LockMode.READ,
            lambda: [
                row
                for row in self._cash_in_out_repo.find_by_account(
                    account_id, CashInOutStatus.PROCESSING
                )
                if row.withdrawal
            ],
        )
