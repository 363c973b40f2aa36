from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from account_core.domain.entities import Account
    from account_core.domain.value_objects import AccountId


class AccountRepository(ABC):
    """Port for account persistence.

    Contract:
    - get() returns None if the account does not exist (no exception)
    - save() performs upsert: creates if new, updates if exists
    - Writes made inside a transaction become visible to other callers
      only after commit
    - Implementations are NOT thread-safe; callers must hold the account
      lock via AccountLockManager

    Thread safety note:
    Repositories assume the caller runs inside TransactionalExecutor,
    which serializes access per account. This matches database behavior
    where transaction isolation is external to the repository.
    """

    @abstractmethod
    def get(self, account_id: AccountId) -> Account | None:
        """Retrieve an account by ID.

        Returns:
            The Account entity if found, None otherwise.
            Returned entity is a copy; mutations do not affect stored state.
        """

    @abstractmethod
    def save(self, account: Account) -> None:
        """Persist an account (upsert semantics)."""
