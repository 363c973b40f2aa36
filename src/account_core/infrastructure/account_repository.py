from __future__ import annotations

import copy
from typing import TYPE_CHECKING

from account_core.application.ports import AccountRepository

if TYPE_CHECKING:
    from account_core.domain.entities import Account
    from account_core.domain.value_objects import AccountId
    from account_core.infrastructure.transaction_provider import InMemoryDatabase

TABLE = "accounts"


class InMemoryAccountRepository(AccountRepository):
    """In-memory account repository backed by an InMemoryDatabase.

    Implementation notes:
    - Uses AccountId as row key (requires frozen dataclass)
    - Returns deep copies from get() to mimic database detachment
    - Stores deep copies in save() to prevent external mutation
    - Inside a transaction, save() is buffered until commit
    - NOT thread-safe; relies on the account lock for serialization
    """

    def __init__(self, database: InMemoryDatabase) -> None:
        self._database = database

    def get(self, account_id: AccountId) -> Account | None:
        account = self._database.read(TABLE, account_id)
        if account is None:
            return None
        return copy.deepcopy(account)

    def save(self, account: Account) -> None:
        self._database.write(TABLE, account.id, copy.deepcopy(account))
