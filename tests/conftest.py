"""Shared pytest fixtures for the test suite."""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any

import pytest

from payments_security.application.services import RateLimiter, SignatureVerifier
from payments_security.application.use_cases import PaymentOrchestrator
from payments_security.domain.services import IntegrityChecker, compute_signature
from payments_security.domain.value_objects import OrderSnapshot, OrderStatus, PaymentCallback
from payments_security.infrastructure.attempt_store import InMemoryAttemptStore
from payments_security.infrastructure.in_memory_gateway import InMemoryPaymentGateway
from payments_security.infrastructure.lock_provider import InMemoryLockProvider
from payments_security.infrastructure.time_provider import FixedTimeProvider

TEST_SECRET = "test_key_secret_0123456789"


@pytest.fixture
def fixed_time() -> datetime:
    """A fixed timestamp for deterministic testing."""
    return datetime(2024, 1, 15, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def time_provider(fixed_time: datetime) -> FixedTimeProvider:
    """A time provider with a fixed timestamp."""
    return FixedTimeProvider(fixed_time)


@pytest.fixture
def lock_provider() -> InMemoryLockProvider:
    """An in-memory lock provider for testing."""
    return InMemoryLockProvider()


@pytest.fixture
def attempt_store() -> InMemoryAttemptStore:
    return InMemoryAttemptStore()


@pytest.fixture
def rate_limiter(
    attempt_store: InMemoryAttemptStore,
    lock_provider: InMemoryLockProvider,
    time_provider: FixedTimeProvider,
) -> RateLimiter:
    """Rate limiter with the default 3 attempts per 15 minutes."""
    return RateLimiter(
        attempt_store=attempt_store,
        lock_provider=lock_provider,
        time_provider=time_provider,
    )


@pytest.fixture
def secret() -> str:
    return TEST_SECRET


@pytest.fixture
def signature_verifier(secret: str) -> SignatureVerifier:
    return SignatureVerifier(secret)


@pytest.fixture
def gateway(time_provider: FixedTimeProvider) -> InMemoryPaymentGateway:
    return InMemoryPaymentGateway(time_provider)


@pytest.fixture
def orchestrator(
    rate_limiter: RateLimiter,
    signature_verifier: SignatureVerifier,
    gateway: InMemoryPaymentGateway,
    time_provider: FixedTimeProvider,
) -> PaymentOrchestrator:
    return PaymentOrchestrator(
        rate_limiter=rate_limiter,
        signature_verifier=signature_verifier,
        integrity_checker=IntegrityChecker(),
        payment_gateway=gateway,
        time_provider=time_provider,
    )


@pytest.fixture
def make_order(fixed_time: datetime) -> Callable[..., OrderSnapshot]:
    """Factory for order snapshots; defaults to a fresh 499.99 INR order."""

    def _make(**overrides: Any) -> OrderSnapshot:
        age = overrides.pop("age", timedelta(minutes=5))
        fields: dict[str, Any] = {
            "id": "order_9A33XWu170gUtm",
            "amount_minor_units": 49999,
            "currency": "INR",
            "status": OrderStatus.CREATED,
            "created_at_epoch_seconds": int((fixed_time - age).timestamp()),
        }
        fields.update(overrides)
        return OrderSnapshot(**fields)

    return _make


@pytest.fixture
def signed_callback(secret: str) -> Callable[[str, str], PaymentCallback]:
    """Factory for callbacks carrying a valid signature."""

    def _sign(order_id: str, payment_id: str) -> PaymentCallback:
        return PaymentCallback(
            order_id=order_id,
            payment_id=payment_id,
            signature=compute_signature(order_id, payment_id, secret),
        )

    return _sign
