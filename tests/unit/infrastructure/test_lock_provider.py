"""Tests for LockProvider implementations.

Tests cover:
- InMemoryLockProvider two-phase locking
- Lock release on exception
- Per-actor serialization and cross-actor parallelism
- NoOpLockProvider for single-threaded tests
"""

import threading
import time
from concurrent.futures import ThreadPoolExecutor, wait

import pytest

from payments_security.application.ports import LockProvider
from payments_security.infrastructure.lock_provider import (
    InMemoryLockProvider,
    NoOpLockProvider,
)

# =============================================================================
# InMemoryLockProvider
# =============================================================================


class TestInMemoryLockProvider:
    def test_implements_lock_provider_interface(self) -> None:
        assert isinstance(InMemoryLockProvider(), LockProvider)

    def test_same_actor_can_be_locked_sequentially(self) -> None:
        provider = InMemoryLockProvider()
        acquisitions = 0

        with provider.acquire("rate-limit:u1"):
            acquisitions += 1
        with provider.acquire("rate-limit:u1"):
            acquisitions += 1

        assert acquisitions == 2

    def test_different_actors_can_be_held_together(self) -> None:
        provider = InMemoryLockProvider()

        with provider.acquire("rate-limit:u1"), provider.acquire("rate-limit:u2"):
            pass

    def test_lock_created_once_per_resource(self) -> None:
        provider = InMemoryLockProvider()

        with provider.acquire("rate-limit:u1"):
            first_lock = provider._locks["rate-limit:u1"]
        with provider.acquire("rate-limit:u1"):
            second_lock = provider._locks["rate-limit:u1"]

        assert first_lock is second_lock


class TestInMemoryLockProviderExceptionSafety:
    def test_lock_released_on_exception(self) -> None:
        """A failing critical section must not leave the actor locked forever."""
        provider = InMemoryLockProvider()

        with pytest.raises(RuntimeError), provider.acquire("rate-limit:u1"):
            raise RuntimeError("store failure")

        acquired = False
        with provider.acquire("rate-limit:u1"):
            acquired = True

        assert acquired is True


class TestInMemoryLockProviderConcurrency:
    def test_same_actor_is_serialized(self) -> None:
        provider = InMemoryLockProvider()
        inside = 0
        max_inside = 0
        counter_lock = threading.Lock()

        def worker() -> None:
            nonlocal inside, max_inside
            with provider.acquire("rate-limit:u1"):
                with counter_lock:
                    inside += 1
                    max_inside = max(max_inside, inside)
                time.sleep(0.01)
                with counter_lock:
                    inside -= 1

        with ThreadPoolExecutor(max_workers=5) as executor:
            wait([executor.submit(worker) for _ in range(10)])

        assert max_inside == 1

    def test_different_actors_run_in_parallel(self) -> None:
        provider = InMemoryLockProvider()
        inside = 0
        max_inside = 0
        counter_lock = threading.Lock()
        barrier = threading.Barrier(3, timeout=5)

        def worker(actor_id: str) -> None:
            nonlocal inside, max_inside
            with provider.acquire(f"rate-limit:{actor_id}"):
                with counter_lock:
                    inside += 1
                    max_inside = max(max_inside, inside)
                barrier.wait()
                with counter_lock:
                    inside -= 1

        with ThreadPoolExecutor(max_workers=3) as executor:
            futures = [executor.submit(worker, f"u{i}") for i in range(3)]
            wait(futures, timeout=10)

        for future in futures:
            future.result()
        assert max_inside == 3


# =============================================================================
# NoOpLockProvider
# =============================================================================


class TestNoOpLockProvider:
    def test_implements_lock_provider_interface(self) -> None:
        assert isinstance(NoOpLockProvider(), LockProvider)

    def test_reentrant_acquire_does_not_block(self) -> None:
        provider = NoOpLockProvider()

        with provider.acquire("rate-limit:u1"), provider.acquire("rate-limit:u1"):
            pass

    def test_exception_propagates(self) -> None:
        provider = NoOpLockProvider()

        with pytest.raises(RuntimeError, match="boom"), provider.acquire("rate-limit:u1"):
            raise RuntimeError("boom")
