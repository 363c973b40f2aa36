from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from account_core.application.use_cases.support import UseCaseSupport

if TYPE_CHECKING:
    import logging

    from account_core.application.executor import TransactionalExecutor
    from account_core.application.ports import CashInOutRepository
    from account_core.domain.entities import CashInOut, CashInOutStatus


@dataclass(frozen=True, slots=True)
class FindCashInOutRequest:
    """Search criteria for the back-office cash transfer listing."""

    status: CashInOutStatus | None = None
    withdrawal: bool | None = None


class FindCashInOutUseCase(UseCaseSupport):
    """Back-office search across all accounts.

    Spans every account, so it runs in a plain transaction without any
    account lock.
    """

    def __init__(
        self,
        executor: TransactionalExecutor,
        cash_in_out_repository: CashInOutRepository,
        logger: logging.Logger | None = None,
    ) -> None:
        super().__init__(executor, logger)
        self._cash_in_out_repo = cash_in_out_repository

    def execute(self, request: FindCashInOutRequest) -> list[CashInOut]:
        return self.tx(lambda: self._find(request))

    def _find(self, request: FindCashInOutRequest) -> list[CashInOut]:
        rows = self._cash_in_out_repo.find(request.status)
        if request.withdrawal is None:
            return rows
        return [row for row in rows if row.withdrawal == request.withdrawal]
