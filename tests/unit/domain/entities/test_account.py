"""Tests for Account entity.

Tests cover:
- Opening balance validation
- deposit() and withdraw() return new instances
- Amount validation and insufficient funds
"""

from dataclasses import FrozenInstanceError

import pytest

from account_core.domain.entities import Account
from account_core.domain.exceptions import InsufficientFundsError, InvalidAmountError
from account_core.domain.value_objects import AccountId


@pytest.fixture
def account() -> Account:
    return Account.open(AccountId(value="acct-1"), balance_cents=100)


class TestAccountOpen:
    def test_open_defaults_to_zero_balance(self) -> None:
        account = Account.open(AccountId(value="acct-1"))

        assert account.balance_cents == 0

    def test_open_with_balance(self, account: Account) -> None:
        assert account.id == AccountId(value="acct-1")
        assert account.balance_cents == 100

    def test_open_with_negative_balance_raises(self) -> None:
        with pytest.raises(InvalidAmountError):
            Account.open(AccountId(value="acct-1"), balance_cents=-1)

    def test_account_is_frozen(self, account: Account) -> None:
        with pytest.raises(FrozenInstanceError):
            account.balance_cents = 5  # type: ignore[misc]


# =============================================================================
# Deposit Tests
# =============================================================================


class TestAccountDeposit:
    def test_deposit_returns_new_instance_with_added_balance(self, account: Account) -> None:
        updated = account.deposit(25)

        assert updated.balance_cents == 125
        assert updated.id == account.id
        assert account.balance_cents == 100

    @pytest.mark.parametrize("amount_cents", [0, -10])
    def test_deposit_non_positive_amount_raises(
        self, account: Account, amount_cents: int
    ) -> None:
        with pytest.raises(InvalidAmountError):
            account.deposit(amount_cents)


# =============================================================================
# Withdraw Tests
# =============================================================================


class TestAccountWithdraw:
    def test_withdraw_returns_new_instance_with_reduced_balance(self, account: Account) -> None:
        updated = account.withdraw(40)

        assert updated.balance_cents == 60
        assert account.balance_cents == 100

    def test_withdraw_entire_balance(self, account: Account) -> None:
        assert account.withdraw(100).balance_cents == 0

    def test_withdraw_more_than_balance_raises(self, account: Account) -> None:
        with pytest.raises(InsufficientFundsError, match="cannot withdraw amount_cents=101"):
            account.withdraw(101)

    @pytest.mark.parametrize("amount_cents", [0, -10])
    def test_withdraw_non_positive_amount_raises(
        self, account: Account, amount_cents: int
    ) -> None:
        with pytest.raises(InvalidAmountError):
            account.withdraw(amount_cents)
