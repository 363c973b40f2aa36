"""Value objects - Immutable objects defined by their attributes."""

from account_core.domain.value_objects.account_id import AccountId
from account_core.domain.value_objects.cash_in_out_id import CashInOutId

__all__ = [
    "AccountId",
    "CashInOutId",
]
