"""Domain services - Stateless operations on domain objects."""

from payments_security.domain.services.integrity import IntegrityChecker, validate_order_integrity
from payments_security.domain.services.receipts import generate_secure_receipt
from payments_security.domain.services.risk import OrderSecurityAnalysis, classify_order_risk
from payments_security.domain.services.signature import (
    SCHEME_V1,
    SignatureScheme,
    compute_signature,
    signatures_match,
)

__all__ = [
    "SCHEME_V1",
    "IntegrityChecker",
    "OrderSecurityAnalysis",
    "SignatureScheme",
    "classify_order_risk",
    "compute_signature",
    "generate_secure_receipt",
    "signatures_match",
    "validate_order_integrity",
]
