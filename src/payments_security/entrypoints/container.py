from __future__ import annotations

from typing import TYPE_CHECKING

from payments_security.application.services import RateLimiter, SignatureVerifier
from payments_security.application.use_cases import PaymentOrchestrator
from payments_security.config import SecuritySettings
from payments_security.domain.services import IntegrityChecker
from payments_security.infrastructure import (
    InMemoryAttemptStore,
    InMemoryLockProvider,
    RazorpayGateway,
    SystemTimeProvider,
    configure_logging,
)

if TYPE_CHECKING:
    from payments_security.application.ports import (
        AttemptStore,
        LockProvider,
        PaymentGateway,
        TimeProvider,
    )


def build_payment_orchestrator(
    settings: SecuritySettings | None = None,
    *,
    payment_gateway: PaymentGateway | None = None,
    attempt_store: AttemptStore | None = None,
    lock_provider: LockProvider | None = None,
    time_provider: TimeProvider | None = None,
    setup_logging: bool = False,
) -> PaymentOrchestrator:
    """Wire a PaymentOrchestrator from settings.

    Any collaborator can be injected; the defaults are a single-process
    setup (in-memory attempt store and locks) talking to Razorpay.

    Raises:
        ConfigurationError: If settings are loaded from the environment and
            credentials are missing or invalid.
    """
    settings = settings or SecuritySettings.from_env()
    if setup_logging:
        configure_logging(settings.log_level, json=settings.log_json)

    secret = settings.key_secret.get_secret_value()
    time_provider = time_provider or SystemTimeProvider()

    rate_limiter = RateLimiter(
        attempt_store=attempt_store or InMemoryAttemptStore(),
        lock_provider=lock_provider or InMemoryLockProvider(),
        time_provider=time_provider,
        max_attempts=settings.max_attempts,
        cooldown_window=settings.cooldown_window,
    )
    gateway = payment_gateway or RazorpayGateway(
        key_id=settings.key_id,
        key_secret=secret,
        base_url=settings.gateway_base_url,
        timeout_seconds=settings.gateway_timeout_seconds,
    )
    return PaymentOrchestrator(
        rate_limiter=rate_limiter,
        signature_verifier=SignatureVerifier(secret),
        integrity_checker=IntegrityChecker(
            amount_tolerance_minor_units=settings.amount_tolerance_minor_units,
            order_freshness_window=settings.order_freshness_window,
        ),
        payment_gateway=gateway,
        time_provider=time_provider,
        count_signature_failures=settings.count_signature_failures,
        high_value_threshold_minor_units=settings.high_value_threshold_minor_units,
    )
