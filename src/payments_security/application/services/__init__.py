"""Application services - Stateful collaborators composed by use cases."""

from payments_security.application.services.rate_limiter import RateLimiter
from payments_security.application.services.signature_verifier import (
    SignatureVerifier,
    verify_payment_signature,
)

__all__ = [
    "RateLimiter",
    "SignatureVerifier",
    "verify_payment_signature",
]
