"""Tests for TimeProvider implementations.

Tests cover:
- SystemTimeProvider returns the current UTC time
- FixedTimeProvider set_time() and advance() for test scenarios
- UTC validation rejects naive and non-UTC datetimes
"""

from concurrent.futures import ThreadPoolExecutor
from datetime import UTC, datetime, timedelta, timezone

import pytest

from account_core.application.ports import TimeProvider
from account_core.infrastructure.time_provider import (
    FixedTimeProvider,
    SystemTimeProvider,
)

START = datetime(2024, 1, 15, 12, 0, 0, tzinfo=UTC)
PLUS_SIX = timezone(timedelta(hours=6))


class TestSystemTimeProvider:
    def test_implements_time_provider_interface(self) -> None:
        assert isinstance(SystemTimeProvider(), TimeProvider)

    def test_now_returns_current_utc_time(self) -> None:
        provider = SystemTimeProvider()
        before = datetime.now(UTC)

        result = provider.now()

        assert result.tzinfo is UTC
        assert before <= result <= datetime.now(UTC)


# =============================================================================
# FixedTimeProvider Tests
# =============================================================================


class TestFixedTimeProvider:
    def test_implements_time_provider_interface(self) -> None:
        assert isinstance(FixedTimeProvider(START), TimeProvider)

    def test_now_returns_fixed_time_until_changed(self) -> None:
        provider = FixedTimeProvider(START)

        assert provider.now() == provider.now() == START

    def test_set_time_changes_returned_time(self) -> None:
        provider = FixedTimeProvider(START)
        earlier = START - timedelta(days=1)

        provider.set_time(earlier)

        assert provider.now() == earlier

    def test_advance_moves_clock_forward_and_returns_new_time(self) -> None:
        provider = FixedTimeProvider(START)

        result = provider.advance(timedelta(seconds=90))

        assert result == START + timedelta(seconds=90)
        assert provider.now() == result

    def test_concurrent_advances_are_not_lost(self) -> None:
        provider = FixedTimeProvider(START)

        with ThreadPoolExecutor(max_workers=4) as pool:
            results = list(pool.map(lambda _: provider.advance(timedelta(seconds=1)), range(100)))

        assert provider.now() == START + timedelta(seconds=100)
        assert len(set(results)) == 100


# =============================================================================
# UTC Validation Tests
# =============================================================================


class TestFixedTimeProviderUtcValidation:
    """FixedTimeProvider requires tzinfo=UTC specifically, not any aware value."""

    @pytest.mark.parametrize(
        "value",
        [datetime(2024, 1, 1, 12, 0, 0), datetime(2024, 1, 1, 12, 0, 0, tzinfo=PLUS_SIX)],
        ids=["naive", "non-utc"],
    )
    def test_creation_rejects_non_utc(self, value: datetime) -> None:
        with pytest.raises(ValueError, match="tzinfo=UTC"):
            FixedTimeProvider(value)

    @pytest.mark.parametrize(
        "value",
        [datetime(2024, 1, 1, 12, 0, 0), datetime(2024, 1, 1, 12, 0, 0, tzinfo=PLUS_SIX)],
        ids=["naive", "non-utc"],
    )
    def test_set_time_rejects_non_utc(self, value: datetime) -> None:
        provider = FixedTimeProvider(START)

        with pytest.raises(ValueError, match="tzinfo=UTC"):
            provider.set_time(value)

        assert provider.now() == START
