import logging
from datetime import UTC, datetime

import pytest

from account_core.application.ports import CashOutNotifier
from account_core.domain.entities import CashInOut
from account_core.domain.value_objects import AccountId
from account_core.infrastructure.cash_out_notifier import InMemoryCashOutNotifier


@pytest.fixture
def cash_out() -> CashInOut:
    return CashInOut.request(
        account_id=AccountId(value="acct-1"),
        amount_cents=30,
        withdrawal=True,
        requested_at=datetime(2024, 1, 15, 12, 0, 0, tzinfo=UTC),
    )


class TestInMemoryCashOutNotifier:
    def test_implements_cash_out_notifier(self, notifier: InMemoryCashOutNotifier) -> None:
        assert isinstance(notifier, CashOutNotifier)

    def test_records_notified_withdrawals(
        self,
        notifier: InMemoryCashOutNotifier,
        cash_out: CashInOut,
    ) -> None:
        notifier.notify_registered(cash_out)

        assert notifier.sent == [cash_out]

    def test_sent_returns_a_copy(
        self,
        notifier: InMemoryCashOutNotifier,
        cash_out: CashInOut,
    ) -> None:
        notifier.notify_registered(cash_out)

        notifier.sent.clear()

        assert notifier.sent == [cash_out]

    def test_logs_each_notification(
        self,
        notifier: InMemoryCashOutNotifier,
        cash_out: CashInOut,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        with caplog.at_level(logging.INFO, logger="account_core"):
            notifier.notify_registered(cash_out)

        assert "registered for account acct-1" in caplog.text
