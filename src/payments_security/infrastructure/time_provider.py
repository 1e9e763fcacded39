from datetime import UTC, datetime, timedelta

from payments_security.application.ports import TimeProvider


class SystemTimeProvider(TimeProvider):
    """Wall clock in UTC."""

    def now(self) -> datetime:
        return datetime.now(UTC)


class FixedTimeProvider(TimeProvider):
    """Manually driven clock for cooldown and freshness tests.

    Reads are safe from many threads; set_time() and advance() are not,
    so concurrency tests must leave the clock alone while workers run.
    """

    def __init__(self, fixed_time: datetime) -> None:
        self._fixed_time = _require_utc(fixed_time)

    def now(self) -> datetime:
        return self._fixed_time

    def set_time(self, new_time: datetime) -> None:
        self._fixed_time = _require_utc(new_time)

    def advance(self, delta: timedelta) -> None:
        """Jump forward by `delta`, e.g. past a cooldown window."""
        self._fixed_time += delta


def _require_utc(value: datetime) -> datetime:
    if value.tzinfo is not UTC:
        raise ValueError(f"datetime must have tzinfo=UTC, got tzinfo={value.tzinfo}")
    return value
