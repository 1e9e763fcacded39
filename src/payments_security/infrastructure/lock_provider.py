from __future__ import annotations

from contextlib import contextmanager
from threading import Lock
from typing import TYPE_CHECKING

from payments_security.application.ports import LockProvider

if TYPE_CHECKING:
    from collections.abc import Iterator


class InMemoryLockProvider(LockProvider):
    """One threading.Lock per rate-limit key, created on first use.

    A registry lock guards only the key → Lock lookup, so callers for
    different actors never wait on each other beyond that dictionary
    access. Locks are kept for the life of the process and only
    serialize threads of this process; several server processes need a
    shared lock backend instead.
    """

    def __init__(self) -> None:
        self._locks: dict[str, Lock] = {}
        self._global_lock = Lock()

    def _lock_for(self, resource_id: str) -> Lock:
        with self._global_lock:
            return self._locks.setdefault(resource_id, Lock())

    @contextmanager
    def acquire(self, resource_id: str) -> Iterator[None]:
        with self._lock_for(resource_id):
            yield


class NoOpLockProvider(LockProvider):
    """Never blocks. For single-threaded rate limiter tests only."""

    @contextmanager
    def acquire(self, resource_id: str) -> Iterator[None]:  # noqa: ARG002
        yield
