from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from account_core.domain.entities import CashInOut, CashInOutStatus
    from account_core.domain.value_objects import AccountId, CashInOutId


class CashInOutRepository(ABC):
    """Port for cash transfer request persistence.

    Contract:
    - get() returns None if the request does not exist
    - save() performs upsert keyed by CashInOut.id
    - find_*() return copies ordered by requested_at, oldest first
    - Implementations are NOT thread-safe; callers must ensure serialization
    """

    @abstractmethod
    def get(self, cash_in_out_id: CashInOutId) -> CashInOut | None:
        """Retrieve a request by ID."""

    @abstractmethod
    def save(self, cash_in_out: CashInOut) -> None:
        """Persist a request (upsert semantics)."""

    @abstractmethod
    def find_by_account(
        self,
        account_id: AccountId,
        status: CashInOutStatus | None = None,
    ) -> list[CashInOut]:
        """Return the account's requests, optionally filtered by status."""

    @abstractmethod
    def find(self, status: CashInOutStatus | None = None) -> list[CashInOut]:
        """Return requests across all accounts, optionally filtered by status."""
