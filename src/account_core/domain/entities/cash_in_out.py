"""Cash transfer request entity with status transitions."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING

from account_core.domain.exceptions import InvalidAmountError, InvalidStateTransitionError
from account_core.domain.value_objects import CashInOutId

if TYPE_CHECKING:
    from datetime import datetime

    from account_core.domain.value_objects import AccountId


class CashInOutStatus(Enum):
    """Lifecycle states of a cash transfer request."""

    PROCESSING = "processing"
    PROCESSED = "processed"
    CANCELLED = "cancelled"


@dataclass(frozen=True, slots=True)
class CashInOut:
    """A cash deposit or withdrawal request against an account.

    Withdrawal requests are registered in PROCESSING state and reserve
    their amount until processed (balance debited) or cancelled.

    State machine:
        - processing → processed (process)
        - processing → cancelled (cancel)
        - processed and cancelled are terminal

    Use the request() factory method to construct instances with validation.
    """

    id: CashInOutId
    account_id: AccountId
    amount_cents: int
    withdrawal: bool
    status: CashInOutStatus
    requested_at: datetime
    processed_at: datetime | None = None

    @classmethod
    def request(
        cls,
        account_id: AccountId,
        amount_cents: int,
        withdrawal: bool,
        requested_at: datetime,
    ) -> CashInOut:
        """Factory method to create a PROCESSING request.

        Raises:
            InvalidAmountError: If amount_cents <= 0.
        """
        if amount_cents <= 0:
            raise InvalidAmountError(
                f"Transfer amount must be greater than 0, got {amount_cents}"
            )

        return cls(
            id=CashInOutId.generate(),
            account_id=account_id,
            amount_cents=amount_cents,
            withdrawal=withdrawal,
            status=CashInOutStatus.PROCESSING,
            requested_at=requested_at,
        )

    @property
    def is_pending(self) -> bool:
        return self.status == CashInOutStatus.PROCESSING

    def process(self, now: datetime) -> CashInOut:
        """Mark the request as processed.

        Raises:
            InvalidStateTransitionError: If not in PROCESSING state.
        """
        self._require_processing("process")
        return replace(self, status=CashInOutStatus.PROCESSED, processed_at=now)

    def cancel(self, now: datetime) -> CashInOut:
        """Mark the request as cancelled.

        Raises:
            InvalidStateTransitionError: If not in PROCESSING state.
        """
        self._require_processing("cancel")
        return replace(self, status=CashInOutStatus.CANCELLED, processed_at=now)

    def _require_processing(self, action: str) -> None:
        if self.status != CashInOutStatus.PROCESSING:
            raise InvalidStateTransitionError(
                f"Cannot {action} cash in/out in state {self.status.value}; "
                f"must be in {CashInOutStatus.PROCESSING.value} state"
            )
