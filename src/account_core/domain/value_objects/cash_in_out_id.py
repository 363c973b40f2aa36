from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID, uuid4

from account_core.domain.exceptions import InvalidCashInOutIdError


@dataclass(frozen=True, slots=True)
class CashInOutId:
    """Value object for cash transfer request identifiers (UUID v4)."""

    value: UUID

    @classmethod
    def generate(cls) -> CashInOutId:
        """Generate a new unique CashInOutId."""
        return cls(value=uuid4())

    @classmethod
    def from_string(cls, id_str: str) -> CashInOutId:
        """Parse a CashInOutId from a string representation.

        Args:
            id_str: UUID string (with or without hyphens, any case).

        Returns:
            A CashInOutId instance.

        Raises:
            InvalidCashInOutIdError: If the string is not a valid UUID.
        """
        try:
            return cls(value=UUID(id_str))
        except (ValueError, AttributeError, TypeError) as e:
            raise InvalidCashInOutIdError(f"Invalid cash in/out ID: {id_str}") from e
