"""Domain exceptions for payments-security.

Exception hierarchy:
    PaymentSecurityError (base)
    ├── ConfigurationError (fatal at startup)
    └── UpstreamError (gateway call failed; caller decides on retry)
        ├── GatewayTimeoutError
        ├── GatewayResponseError
        └── OrderNotFoundError

Validation, authentication and integrity failures are NOT raised. They are
returned as structured results tagged with a FailureKind so that nothing
on the call-in surface aborts the booking flow.
"""

from __future__ import annotations

from enum import Enum


class FailureKind(Enum):
    """Categories of recoverable, caller-visible failures."""

    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    INTEGRITY = "integrity"
    UPSTREAM = "upstream"


class PaymentSecurityError(Exception):
    """Base exception for all payments-security errors."""


# =============================================================================
# Startup Errors
# =============================================================================


class ConfigurationError(PaymentSecurityError):
    """Raised when required secrets or tunables are absent or invalid.

    The orchestrator refuses to initialize rather than operate with an
    undefined signing key.
    """


# =============================================================================
# Upstream Errors
# =============================================================================


class UpstreamError(PaymentSecurityError):
    """Raised when a payment gateway call fails.

    This core never retries: a retried capture or refund could move money
    twice. Callers holding idempotency keys make that decision.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class GatewayTimeoutError(UpstreamError):
    """Raised when the gateway did not answer within the configured timeout.

    The outcome of the remote operation is unknown.
    """


class GatewayResponseError(UpstreamError):
    """Raised on a non-2xx response or a payload that cannot be parsed."""


class OrderNotFoundError(UpstreamError):
    """Raised when the gateway reports that an order id does not exist."""
