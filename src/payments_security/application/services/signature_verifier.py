"""Authentication of gateway payment callbacks.

Every outcome is audit-logged with the order id, the payment id and an
8-character prefix of the received signature. The full signature and the
secret are never logged.
"""

from __future__ import annotations

import structlog

from payments_security.application.dtos import VerificationResult
from payments_security.domain.exceptions import ConfigurationError, FailureKind
from payments_security.domain.services.signature import (
    SCHEME_V1,
    SignatureScheme,
    compute_signature,
    signatures_match,
)

MIN_SIGNATURE_LENGTH = 10
SIGNATURE_PREFIX_LENGTH = 8


class SignatureVerifier:
    """Verifies HMAC-SHA256 signatures over callback identifiers.

    Contract:
    - verify() never raises; every failure is a VerificationResult
    - missing identifiers and malformed signatures are VALIDATION failures
    - a well-formed but wrong signature is an AUTHENTICATION failure
    - comparison is constant-time over bytes
    """

    def __init__(self, secret: str, scheme: SignatureScheme = SCHEME_V1) -> None:
        if not secret:
            raise ConfigurationError("Signature secret is not configured")
        try:
            secret.encode()
        except UnicodeEncodeError as e:
            raise ConfigurationError("Signature secret is not valid UTF-8") from e
        self._secret = secret
        self._scheme = scheme
        self._logger = structlog.get_logger().bind(
            component="signature_verifier",
            scheme=scheme.version,
        )

    def verify(
        self,
        order_id: str | None,
        payment_id: str | None,
        signature: str | None,
    ) -> VerificationResult:
        """Authenticate a payment callback.

        Args:
            order_id: Gateway order id from the callback.
            payment_id: Gateway payment id from the callback.
            signature: Hex HMAC the gateway attached to the callback.

        Returns:
            VerificationResult with success=True only if the signature
            matches the one recomputed with the shared secret.
        """
        log = self._logger.bind(
            order_id=order_id,
            payment_id=payment_id,
            signature_prefix=_truncate(signature),
        )

        missing = [
            name
            for name, value in (
                ("order_id", order_id),
                ("payment_id", payment_id),
                ("signature", signature),
            )
            if not value
        ]
        if missing:
            message = f"Missing required parameters: {', '.join(missing)}"
            log.warning("payment_signature_invalid_input", reason=message)
            return VerificationResult(
                success=False, message=message, failure_kind=FailureKind.VALIDATION
            )

        if not isinstance(signature, str) or len(signature) < MIN_SIGNATURE_LENGTH:
            log.warning("payment_signature_invalid_input", reason="malformed signature")
            return VerificationResult(
                success=False,
                message="Invalid signature format",
                failure_kind=FailureKind.VALIDATION,
            )

        try:
            expected = compute_signature(
                str(order_id), str(payment_id), self._secret, self._scheme
            )
        except UnicodeEncodeError:
            log.warning("payment_signature_invalid_input", reason="unencodable identifiers")
            return VerificationResult(
                success=False,
                message="Invalid callback identifiers",
                failure_kind=FailureKind.VALIDATION,
            )
        if not signatures_match(expected, signature):
            log.warning("payment_signature_rejected")
            return VerificationResult(
                success=False,
                message="Invalid payment signature",
                failure_kind=FailureKind.AUTHENTICATION,
            )

        log.info("payment_signature_verified")
        return VerificationResult(success=True, message="Payment signature verified")


def verify_payment_signature(
    order_id: str | None,
    payment_id: str | None,
    signature: str | None,
    shared_secret: str,
) -> VerificationResult:
    """One-shot verification with an explicit secret.

    Raises:
        ConfigurationError: If shared_secret is empty.
    """
    return SignatureVerifier(shared_secret).verify(order_id, payment_id, signature)


def _truncate(signature: object) -> str:
    if not signature:
        return "missing"
    if not isinstance(signature, str):
        return "malformed"
    return signature[:SIGNATURE_PREFIX_LENGTH] + "..."
