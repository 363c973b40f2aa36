from __future__ import annotations

import copy
from typing import TYPE_CHECKING

from account_core.application.ports import CashInOutRepository

if TYPE_CHECKING:
    from account_core.domain.entities import CashInOut, CashInOutStatus
    from account_core.domain.value_objects import AccountId, CashInOutId
    from account_core.infrastructure.transaction_provider import InMemoryDatabase

TABLE = "cash_in_out"


class InMemoryCashInOutRepository(CashInOutRepository):
    """In-memory cash transfer repository backed by an InMemoryDatabase.

    Implementation notes:
    - Keyed by CashInOutId for O(1) lookup
    - find_*() scan the table; fine for test-sized data
    - NOT thread-safe; relies on the account lock for serialization
    """

    def __init__(self, database: InMemoryDatabase) -> None:
        self._database = database

    def get(self, cash_in_out_id: CashInOutId) -> CashInOut | None:
        cash_in_out = self._database.read(TABLE, cash_in_out_id)
        if cash_in_out is None:
            return None
        return copy.deepcopy(cash_in_out)

    def save(self, cash_in_out: CashInOut) -> None:
        self._database.write(TABLE, cash_in_out.id, copy.deepcopy(cash_in_out))

    def find_by_account(
        self,
        account_id: AccountId,
        status: CashInOutStatus | None = None,
    ) -> list[CashInOut]:
        return [row for row in self.find(status) if row.account_id == account_id]

    def find(self, status: CashInOutStatus | None = None) -> list[CashInOut]:
        rows = [
            row
            for row in self._database.scan(TABLE)
            if status is None or row.status == status
        ]
        rows.sort(key=lambda row: row.requested_at)
        return copy.deepcopy(rows)
