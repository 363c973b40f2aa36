"""Domain entities - Objects with identity and lifecycle."""

from account_core.domain.entities.account import Account
from account_core.domain.entities.cash_in_out import CashInOut, CashInOutStatus

__all__ = [
    "Account",
    "CashInOut",
    "CashInOutStatus",
]
