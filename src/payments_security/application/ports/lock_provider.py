from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator


class LockProvider(ABC):
    """Mutual exclusion per rate-limit key.

    The rate limiter wraps every read-decide-write on an actor's attempt
    record in acquire("rate-limit:<actor_id>"). Implementations must:
    - block until no other holder of the same key remains
    - release on exit, also when the body raises
    - let distinct keys proceed independently
    """

    @abstractmethod
    @contextmanager
    def acquire(self, resource_id: str) -> Iterator[None]:
        """Hold the lock for `resource_id` while the with-block runs.

        Usage:
            with lock_provider.acquire("rate-limit:user-42"):
                record = store.get("user-42")
                ...
        """
