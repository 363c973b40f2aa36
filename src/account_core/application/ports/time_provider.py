from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime


class TimeProvider(ABC):
    """Port for the business clock used to stamp cash transfer requests.

    Contract:
    - now() MUST return a datetime with tzinfo=datetime.UTC
    - Use cases read the clock inside the account lock, so timestamps of
      requests on one account follow lock-grant order
    """

    @abstractmethod
    def now(self) -> datetime:
        """Return the current UTC datetime (tzinfo=datetime.UTC)."""
        ...
