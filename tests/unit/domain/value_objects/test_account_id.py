import pytest

from account_core.domain.exceptions import InvalidAccountIdError
from account_core.domain.value_objects import AccountId


class TestAccountIdValid:
    @pytest.mark.parametrize("value", ["acct-1", "A", "user_42", "x" * 32])
    def test_accepts_valid_values(self, value: str) -> None:
        assert AccountId(value=value).value == value

    def test_strips_surrounding_whitespace(self) -> None:
        account_id = AccountId(value="  acct-1\t")

        assert account_id.value == "acct-1"
        assert account_id == AccountId(value="acct-1")

    def test_lock_key_is_normalized_value(self) -> None:
        assert AccountId(value=" acct-1 ").lock_key == "acct-1"

    def test_is_hashable(self) -> None:
        assert len({AccountId(value="a"), AccountId(value="a "), AccountId(value="b")}) == 2


class TestAccountIdInvalid:
    @pytest.mark.parametrize("value", ["", "   "])
    def test_rejects_empty(self, value: str) -> None:
        with pytest.raises(InvalidAccountIdError, match="empty"):
            AccountId(value=value)

    def test_rejects_too_long(self) -> None:
        with pytest.raises(InvalidAccountIdError, match="32"):
            AccountId(value="x" * 33)

    @pytest.mark.parametrize("value", ["acct 1", "acct/1", "açct", "acct.1"])
    def test_rejects_invalid_characters(self, value: str) -> None:
        with pytest.raises(InvalidAccountIdError, match="invalid characters"):
            AccountId(value=value)

    def test_rejects_non_string(self) -> None:
        with pytest.raises(InvalidAccountIdError, match="must be a string"):
            AccountId(value=42)  # type: ignore[arg-type]
