from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from account_core.application.ports import CashOutNotifier

if TYPE_CHECKING:
    from account_core.domain.entities import CashInOut

logger = logging.getLogger(__name__)


class InMemoryCashOutNotifier(CashOutNotifier):
    """Notifier that logs and records every committed withdrawal.

    Stands in for mail/report delivery in tests and local runs.
    """

    def __init__(self) -> None:
        self._sent: list[CashInOut] = []
        self._lock = threading.Lock()

    @property
    def sent(self) -> list[CashInOut]:
        with self._lock:
            return list(self._sent)

    def notify_registered(self, cash_out: CashInOut) -> None:
        with self._lock:
            self._sent.append(cash_out)
        logger.info(
            "Withdrawal %s registered for account %s: amount_cents=%s",
            cash_out.id.value,
            cash_out.account_id.value,
            cash_out.amount_cents,
        )
