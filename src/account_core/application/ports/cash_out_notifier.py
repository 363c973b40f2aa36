from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from account_core.domain.entities import CashInOut


class CashOutNotifier(ABC):
    """Port for side effects of a registered withdrawal (mail, reports).

    Contract:
    - notify_registered() is called only AFTER the registering transaction
      committed and the account lock was released
    - It is never called for a rolled-back registration
    - Failures are the notifier's concern; they do not undo the registration
    """

    @abstractmethod
    def notify_registered(self, cash_out: CashInOut) -> None:
        """Announce a committed withdrawal request."""
