from __future__ import annotations

import logging
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from collections.abc import Callable

    from account_core.application.executor import TransactionalExecutor
    from account_core.application.ports import LockMode
    from account_core.domain.value_objects import AccountId

T = TypeVar("T")


class UseCaseSupport:
    """Base class for use cases.

    Gives subclasses a logger and the two execution shapes:
    - tx(work): plain transaction
    - tx_locked(account_id, mode, work): transaction under the account lock

    A use case must never call another locked use case on the same
    account from inside its own work.
    """

    def __init__(
        self,
        executor: TransactionalExecutor,
        logger: logging.Logger | None = None,
    ) -> None:
        self._executor = executor
        self._logger = logger or logging.getLogger(type(self).__module__)

    def tx(self, work: Callable[[], T]) -> T:
        return self._executor.run(work)

    def tx_locked(self, account_id: AccountId, mode: LockMode, work: Callable[[], T]) -> T:
        return self._executor.run_locked(account_id.lock_key, mode, work)
