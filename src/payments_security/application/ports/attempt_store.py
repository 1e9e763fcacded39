from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from payments_security.domain.entities import AttemptRecord


class AttemptStore(ABC):
    """Port for per-actor attempt record storage.

    Contract:
    - get() returns None if the actor has no record (no exception)
    - save() performs upsert keyed by record.actor_id
    - delete() is idempotent: deleting an absent record is a no-op
    - Implementations are NOT required to be thread-safe; the RateLimiter
      serializes every read-decide-write sequence per actor via LockProvider

    Backends:
    An in-memory dict serves a single process. A shared key-value store
    serves several instances; it must then be paired with a LockProvider
    that serializes across processes too.
    """

    @abstractmethod
    def get(self, actor_id: str) -> AttemptRecord | None:
        """Retrieve the attempt record for an actor.

        Args:
            actor_id: Canonical string identifier of the actor.

        Returns:
            The AttemptRecord if one exists, None otherwise.
        """

    @abstractmethod
    def save(self, record: AttemptRecord) -> None:
        """Persist an attempt record (upsert semantics)."""

    @abstractmethod
    def delete(self, actor_id: str) -> None:
        """Remove the actor's record if present."""
