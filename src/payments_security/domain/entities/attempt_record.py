"""AttemptRecord entity tracking payment attempts for one actor."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime, timedelta


@dataclass(frozen=True, slots=True)
class AttemptRecord:
    """Per-actor payment attempt counter inside a rolling cooldown window.

    AttemptRecord is immutable (frozen dataclass). register_attempt()
    returns a new record; the rate limiter persists it through an
    AttemptStore.

    Lifecycle:
        - created on the first attempt (count=1)
        - every further attempt increments count and refreshes last_attempt_at
        - expired once the cooldown has fully elapsed since last_attempt_at;
          expiry is detected on read, never by a background sweep
    """

    actor_id: str
    count: int
    last_attempt_at: datetime

    @classmethod
    def first_attempt(cls, actor_id: str, now: datetime) -> AttemptRecord:
        """Create the record for an actor's first attempt."""
        return cls(actor_id=actor_id, count=1, last_attempt_at=now)

    def register_attempt(self, now: datetime) -> AttemptRecord:
        """Return a new record with one more attempt at `now`."""
        return replace(self, count=self.count + 1, last_attempt_at=now)

    def elapsed(self, now: datetime) -> timedelta:
        return now - self.last_attempt_at

    def is_expired(self, now: datetime, cooldown_window: timedelta) -> bool:
        """Check whether the cooldown has fully elapsed since the last attempt.

        Strictly greater-than: at exactly the window boundary the actor is
        still inside the cooldown.
        """
        return self.elapsed(now) > cooldown_window

    def is_exhausted(self, max_attempts: int) -> bool:
        return self.count >= max_attempts
