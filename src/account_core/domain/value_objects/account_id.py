from __future__ import annotations

from dataclasses import dataclass

from account_core.domain.exceptions import InvalidAccountIdError

MAX_LENGTH = 32
ALLOWED_CHARS = set("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789-_")


@dataclass(frozen=True)
class AccountId:
    """Domain value object for account identifiers.

    Rules:
      - Non-empty, max 32 chars
      - Whitespace is trimmed (normalization)
      - ASCII charset only: [A-Za-z0-9-_]

    The normalized value doubles as the account lock key.
    """

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise InvalidAccountIdError(
                f"Account ID must be a string, got {type(self.value).__name__}"
            )

        normalized = self.value.strip()

        if normalized != self.value:
            object.__setattr__(self, "value", normalized)

        if not normalized:
            raise InvalidAccountIdError("Account ID cannot be empty")

        if len(normalized) > MAX_LENGTH:
            raise InvalidAccountIdError(f"Account ID cannot exceed {MAX_LENGTH} characters")

        if any(ch not in ALLOWED_CHARS for ch in normalized):
            raise InvalidAccountIdError(
                "Account ID contains invalid characters; allowed: [A-Za-z0-9-_]"
            )

    @property
    def lock_key(self) -> str:
        """Canonical string used to lock this account."""
        return self.value
