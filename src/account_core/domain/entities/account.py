"""Account entity holding a cash balance."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from account_core.domain.exceptions import InsufficientFundsError, InvalidAmountError

if TYPE_CHECKING:
    from account_core.domain.value_objects import AccountId


@dataclass(frozen=True, slots=True)
class Account:
    """Account entity with an integer balance in cents.

    Account is immutable (frozen dataclass). deposit() and withdraw()
    return a new Account instance; callers persist it through the
    AccountRepository inside an account-locked transaction.
    """

    id: AccountId
    balance_cents: int

    @classmethod
    def open(cls, account_id: AccountId, balance_cents: int = 0) -> Account:
        """Create an account with an opening balance.

        Raises:
            InvalidAmountError: If balance_cents is negative.
        """
        if balance_cents < 0:
            raise InvalidAmountError(f"Opening balance cannot be negative, got {balance_cents}")
        return cls(id=account_id, balance_cents=balance_cents)

    def deposit(self, amount_cents: int) -> Account:
        """Return a copy with amount_cents added to the balance.

        Raises:
            InvalidAmountError: If amount_cents <= 0.
        """
        _require_positive(amount_cents)
        return replace(self, balance_cents=self.balance_cents + amount_cents)

    def withdraw(self, amount_cents: int) -> Account:
        """Return a copy with amount_cents taken from the balance.

        Raises:
            InvalidAmountError: If amount_cents <= 0.
            InsufficientFundsError: If the balance would go negative.
        """
        _require_positive(amount_cents)
        if amount_cents > self.balance_cents:
            raise InsufficientFundsError(
                f"Account {self.id.value} has balance_cents={self.balance_cents}, "
                f"cannot withdraw amount_cents={amount_cents}"
            )
        return replace(self, balance_cents=self.balance_cents - amount_cents)


def _require_positive(amount_cents: int) -> None:
    if amount_cents <= 0:
        raise InvalidAmountError(f"Amount must be greater than 0, got {amount_cents}")
