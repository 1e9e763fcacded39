"""Per-actor payment attempt rate limiting.

An actor may start at most `max_attempts` payment attempts inside a
rolling cooldown window. Once blocked, the actor stays blocked until the
window has fully elapsed since the last attempt; the stale record is then
purged on the next read.
"""

from __future__ import annotations

import math
from datetime import timedelta
from typing import TYPE_CHECKING

import structlog

from payments_security.application.dtos import AuthDecision
from payments_security.domain.entities import AttemptRecord
from payments_security.domain.exceptions import ConfigurationError

if TYPE_CHECKING:
    from datetime import datetime

    from payments_security.application.ports import AttemptStore, LockProvider, TimeProvider

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_COOLDOWN_WINDOW = timedelta(minutes=15)

_ONE_MS = timedelta(milliseconds=1)


class RateLimiter:
    """Tracks payment attempts per actor inside a rolling cooldown window.

    Responsibilities:
    - Acquire the per-actor lock for every read-decide-write sequence
    - Fetch current time inside the lock
    - Purge expired records on read (no background sweep)

    All operations are total over any actor id, including ids never seen.
    """

    def __init__(
        self,
        attempt_store: AttemptStore,
        lock_provider: LockProvider,
        time_provider: TimeProvider,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        cooldown_window: timedelta = DEFAULT_COOLDOWN_WINDOW,
    ) -> None:
        if max_attempts < 1:
            raise ConfigurationError(f"max_attempts must be at least 1, got {max_attempts}")
        if cooldown_window <= timedelta(0):
            raise ConfigurationError(f"cooldown_window must be positive, got {cooldown_window}")

        self._store = attempt_store
        self._lock_provider = lock_provider
        self._time_provider = time_provider
        self._max_attempts = max_attempts
        self._cooldown_window = cooldown_window
        self._logger = structlog.get_logger().bind(component="rate_limiter")

    @property
    def max_attempts(self) -> int:
        return self._max_attempts

    @property
    def cooldown_window(self) -> timedelta:
        return self._cooldown_window

    def check_rate_limit(self, actor_id: object) -> AuthDecision:
        """Decide whether the actor may start another attempt.

        Returns:
            AuthDecision(allowed=True) if the actor has no live record or
            fewer than max_attempts attempts; otherwise allowed=False with
            the remaining cooldown in milliseconds.
        """
        key = str(actor_id)
        with self._lock_provider.acquire(_lock_id(key)):
            return self._check_within_lock(key, self._time_provider.now())

    def record_attempt(self, actor_id: object) -> None:
        """Count one attempt for the actor, creating the record if absent."""
        key = str(actor_id)
        with self._lock_provider.acquire(_lock_id(key)):
            self._record_within_lock(key, self._time_provider.now())

    def clear_attempts(self, actor_id: object) -> None:
        """Forget every attempt of the actor. Idempotent."""
        key = str(actor_id)
        with self._lock_provider.acquire(_lock_id(key)):
            self._store.delete(key)

    def try_acquire(self, actor_id: object) -> AuthDecision:
        """Check and record in one critical section.

        The attempt is recorded only when allowed. Use this when the caller
        cannot tolerate two concurrent requests both passing the check.
        """
        key = str(actor_id)
        with self._lock_provider.acquire(_lock_id(key)):
            now = self._time_provider.now()
            decision = self._check_within_lock(key, now)
            if decision.allowed:
                self._record_within_lock(key, now)
            return decision

    def _check_within_lock(self, key: str, now: datetime) -> AuthDecision:
        record = self._store.get(key)
        if record is None:
            return AuthDecision(allowed=True)

        if record.is_expired(now, self._cooldown_window):
            self._store.delete(key)
            self._logger.debug("rate_limit_record_expired", actor_id=key, count=record.count)
            return AuthDecision(allowed=True)

        if not record.is_exhausted(self._max_attempts):
            return AuthDecision(allowed=True)

        remaining = self._cooldown_window - record.elapsed(now)
        # At the exact window boundary the actor is still blocked; never report 0.
        remaining_ms = max(math.ceil(remaining / _ONE_MS), 1)
        self._logger.warning(
            "rate_limit_blocked",
            actor_id=key,
            count=record.count,
            remaining_cooldown_ms=remaining_ms,
        )
        return AuthDecision(allowed=False, remaining_cooldown_ms=remaining_ms)

    def _record_within_lock(self, key: str, now: datetime) -> None:
        record = self._store.get(key)
        if record is None or record.is_expired(now, self._cooldown_window):
            record = AttemptRecord.first_attempt(key, now)
        else:
            record = record.register_attempt(now)
        self._store.save(record)
        self._logger.debug("payment_attempt_recorded", actor_id=key, count=record.count)


def _lock_id(actor_key: str) -> str:
    return f"rate-limit:{actor_key}"
