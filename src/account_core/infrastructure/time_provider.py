from datetime import UTC, datetime, timedelta
from threading import Lock

from account_core.application.ports import TimeProvider


class SystemTimeProvider(TimeProvider):
    """Wall-clock UTC time."""

    def now(self) -> datetime:
        return datetime.now(UTC)


class FixedTimeProvider(TimeProvider):
    """Manually driven clock for tests.

    advance() lets concurrency tests produce distinct, ordered
    requested_at values. Guarded by a lock since use cases on different
    accounts read the clock from several threads.
    """

    def __init__(self, start: datetime) -> None:
        self._current = _require_utc(start)
        self._lock = Lock()

    def now(self) -> datetime:
        with self._lock:
            return self._current

    def set_time(self, new_time: datetime) -> None:
        """Jump to ``new_time`` (backwards jumps are allowed)."""
        new_time = _require_utc(new_time)
        with self._lock:
            self._current = new_time

    def advance(self, delta: timedelta) -> datetime:
        """Move the clock forward and return the new time."""
        with self._lock:
            self._current += delta
            return self._current


def _require_utc(value: datetime) -> datetime:
    if value.tzinfo is not UTC:
        raise ValueError(f"Clock values must have tzinfo=UTC, got tzinfo={value.tzinfo}")
    return value
