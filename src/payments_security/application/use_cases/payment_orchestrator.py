from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from payments_security.application.dtos import (
    AuthDecision,
    ConfirmPaymentResult,
    CreateOrderResult,
    PaymentAttemptState,
)
from payments_security.domain.exceptions import FailureKind, UpstreamError
from payments_security.domain.services import (
    OrderSecurityAnalysis,
    classify_order_risk,
    generate_secure_receipt,
)
from payments_security.domain.services.integrity import to_integer_minor_units
from payments_security.domain.services.risk import DEFAULT_HIGH_VALUE_THRESHOLD_MINOR_UNITS

if TYPE_CHECKING:
    from decimal import Decimal

    from payments_security.application.ports import PaymentGateway, TimeProvider
    from payments_security.application.services import RateLimiter, SignatureVerifier
    from payments_security.domain.services import IntegrityChecker
    from payments_security.domain.value_objects import PaymentCallback


class PaymentOrchestrator:
    """Entry point of the booking flow into payment security.

    Responsibilities:
    - Gate new attempts through the RateLimiter
    - Authenticate callbacks with the SignatureVerifier
    - Fetch the order from the gateway and cross-validate it
    - Clear the actor's attempts only on a confirmed payment

    State per attempt:
        PENDING → BLOCKED_BY_RATE_LIMIT | SIGNATURE_REJECTED
                | INTEGRITY_REJECTED | CONFIRMED
    BLOCKED_BY_RATE_LIMIT is the only state reached without a gateway call.
    A failed gateway round trip yields STATUS_UNKNOWN and mutates nothing.
    """

    def __init__(
        self,
        rate_limiter: RateLimiter,
        signature_verifier: SignatureVerifier,
        integrity_checker: IntegrityChecker,
        payment_gateway: PaymentGateway,
        time_provider: TimeProvider,
        count_signature_failures: bool = False,
        high_value_threshold_minor_units: int = DEFAULT_HIGH_VALUE_THRESHOLD_MINOR_UNITS,
    ) -> None:
        self._rate_limiter = rate_limiter
        self._verifier = signature_verifier
        self._integrity_checker = integrity_checker
        self._gateway = payment_gateway
        self._time_provider = time_provider
        self._count_signature_failures = count_signature_failures
        self._high_value_threshold = high_value_threshold_minor_units
        self._logger = structlog.get_logger().bind(component="payment_orchestrator")

    # -------------------------------------------------------------------------
    # Attempt gating
    # -------------------------------------------------------------------------

    def authorize_attempt(self, actor_id: object) -> AuthDecision:
        """Ask whether the actor may start a new payment attempt.

        Read-only. When allowed, call record_attempt() before the gateway
        call; the attempt counts whatever its outcome.
        """
        return self._rate_limiter.check_rate_limit(actor_id)

    def record_attempt(self, actor_id: object) -> None:
        self._rate_limiter.record_attempt(actor_id)

    def begin_attempt(self, actor_id: object) -> AuthDecision:
        """Check and record the attempt atomically."""
        return self._rate_limiter.try_acquire(actor_id)

    # -------------------------------------------------------------------------
    # Order creation
    # -------------------------------------------------------------------------

    def create_order(
        self,
        actor_id: object,
        amount_major_units: Decimal | int | float | str,
        currency: str = "INR",
        reference_id: object = "order",
        metadata: dict[str, Any] | None = None,
    ) -> CreateOrderResult:
        """Open a gateway order for the actor if the rate limit allows it.

        The attempt is recorded before the gateway call and stays recorded
        even if the call fails.

        Raises:
            UpstreamError: The gateway could not create the order.
            ValueError: amount_major_units is not a finite number.
        """
        log = self._logger.bind(actor_id=str(actor_id))
        amount_minor_units = to_integer_minor_units(amount_major_units)

        decision = self._rate_limiter.try_acquire(actor_id)
        if not decision.allowed:
            log.warning(
                "payment_attempt_blocked",
                remaining_cooldown_ms=decision.remaining_cooldown_ms,
            )
            return CreateOrderResult(decision=decision)

        now = self._time_provider.now()
        receipt = generate_secure_receipt(actor_id, reference_id, now)
        notes = {
            **(metadata or {}),
            "actor_id": str(actor_id),
            "reference_id": str(reference_id),
            "created_at": now.isoformat(),
        }

        order = self._gateway.create_order(
            amount_minor_units=amount_minor_units,
            currency=currency,
            receipt=receipt,
            notes=notes,
        )
        log.info(
            "payment_order_created",
            order_id=order.id,
            amount_minor_units=order.amount_minor_units,
            currency=order.currency,
            receipt=order.receipt,
        )
        return CreateOrderResult(decision=decision, order=order)

    # -------------------------------------------------------------------------
    # Confirmation
    # -------------------------------------------------------------------------

    def confirm_payment(
        self,
        callback: PaymentCallback,
        expected_amount: Decimal | int | float | str,
        expected_currency: str,
        actor_id: object,
    ) -> ConfirmPaymentResult:
        """Decide whether a completed payment is authentic and correct.

        Never raises for recoverable failures.

        Args:
            callback: Identifiers and signature from the gateway checkout.
            expected_amount: Amount in major units the booking flow charged.
            expected_currency: ISO-4217 code the booking flow charged in.
            actor_id: Actor whose attempts are cleared on success.

        Returns:
            ConfirmPaymentResult whose state is the attempt's terminal state.
        """
        log = self._logger.bind(actor_id=str(actor_id), order_id=callback.order_id)

        # Step 1: Authenticate the callback
        verification = self._verifier.verify(
            callback.order_id, callback.payment_id, callback.signature
        )
        if not verification.success:
            if (
                self._count_signature_failures
                and verification.failure_kind == FailureKind.AUTHENTICATION
            ):
                self._rate_limiter.record_attempt(actor_id)
            return ConfirmPaymentResult(
                success=False,
                message=verification.message,
                state=PaymentAttemptState.SIGNATURE_REJECTED,
                failure_kind=verification.failure_kind,
            )

        # Step 2: Fetch the authoritative order; nothing is mutated on failure
        try:
            order = self._gateway.fetch_order(str(callback.order_id))
        except UpstreamError as e:
            log.error("payment_order_fetch_failed", error=str(e), status_code=e.status_code)
            return ConfirmPaymentResult(
                success=False,
                message=f"Payment status unknown: {e}",
                state=PaymentAttemptState.STATUS_UNKNOWN,
                failure_kind=FailureKind.UPSTREAM,
            )

        # Step 3: Cross-validate against expected business values
        now = self._time_provider.now()
        integrity = self._integrity_checker.validate_order_integrity(
            order, expected_amount, expected_currency, now
        )
        risk_level = classify_order_risk(order, self._high_value_threshold)

        if not integrity.is_valid:
            failed = integrity.failed_checks
            log.warning(
                "payment_integrity_rejected",
                failed_checks=failed,
                order_status=order.status.value,
                risk_level=risk_level.value,
            )
            return ConfirmPaymentResult(
                success=False,
                message=f"Order integrity check failed: {', '.join(failed)}",
                state=PaymentAttemptState.INTEGRITY_REJECTED,
                failure_kind=FailureKind.INTEGRITY,
                failed_checks=failed,
                risk_level=risk_level,
            )

        # Step 4: Confirmed; the actor starts over with a clean slate
        self._rate_limiter.clear_attempts(actor_id)
        log.info(
            "payment_confirmed",
            payment_id=callback.payment_id,
            amount_minor_units=order.amount_minor_units,
            risk_level=risk_level.value,
        )
        return ConfirmPaymentResult(
            success=True,
            message="Payment verified",
            state=PaymentAttemptState.CONFIRMED,
            risk_level=risk_level,
        )

    # -------------------------------------------------------------------------
    # Analysis
    # -------------------------------------------------------------------------

    def analyze_order(self, order_id: str) -> OrderSecurityAnalysis:
        """Fetch an order and summarize its security-relevant facts.

        Raises:
            UpstreamError: The gateway could not return the order.
        """
        order = self._gateway.fetch_order(order_id)
        return OrderSecurityAnalysis.of(order, self._time_provider.now(), self._high_value_threshold)
