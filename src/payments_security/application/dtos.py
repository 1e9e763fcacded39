"""Data Transfer Objects for use case input/output."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from payments_security.application.ports import OrderHandle
    from payments_security.domain.exceptions import FailureKind
    from payments_security.domain.value_objects import RiskLevel


class PaymentAttemptState(Enum):
    """Terminal states of a single payment attempt.

    PENDING → BLOCKED_BY_RATE_LIMIT | SIGNATURE_REJECTED | INTEGRITY_REJECTED | CONFIRMED

    STATUS_UNKNOWN marks an attempt whose gateway round trip failed; the
    caller may retry the fetch or surface "payment status unknown".
    """

    PENDING = "pending"
    BLOCKED_BY_RATE_LIMIT = "blocked_by_rate_limit"
    SIGNATURE_REJECTED = "signature_rejected"
    INTEGRITY_REJECTED = "integrity_rejected"
    CONFIRMED = "confirmed"
    STATUS_UNKNOWN = "status_unknown"


@dataclass(frozen=True, slots=True)
class AuthDecision:
    """Whether an actor may start another payment attempt."""

    allowed: bool
    remaining_cooldown_ms: int = 0

    @property
    def remaining_cooldown_minutes(self) -> int:
        """Cooldown rounded up to whole minutes, for user-facing messages."""
        return -(-self.remaining_cooldown_ms // 60_000)


@dataclass(frozen=True, slots=True)
class VerificationResult:
    """Outcome of verifying a callback signature."""

    success: bool
    message: str
    failure_kind: FailureKind | None = None


@dataclass(frozen=True, slots=True)
class ConfirmPaymentResult:
    """Outcome of confirming a completed payment."""

    success: bool
    message: str
    state: PaymentAttemptState
    failure_kind: FailureKind | None = None
    failed_checks: list[str] = field(default_factory=list)
    risk_level: RiskLevel | None = None


@dataclass(frozen=True, slots=True)
class CreateOrderResult:
    """Outcome of opening a new gateway order for an actor."""

    decision: AuthDecision
    order: OrderHandle | None = None

    @property
    def state(self) -> PaymentAttemptState:
        if not self.decision.allowed:
            return PaymentAttemptState.BLOCKED_BY_RATE_LIMIT
        return PaymentAttemptState.PENDING
