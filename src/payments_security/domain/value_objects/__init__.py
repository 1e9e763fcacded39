"""Value objects - Immutable objects defined by their attributes."""

from payments_security.domain.value_objects.integrity_result import IntegrityResult
from payments_security.domain.value_objects.order_snapshot import OrderSnapshot, OrderStatus
from payments_security.domain.value_objects.payment_callback import PaymentCallback
from payments_security.domain.value_objects.risk_level import RiskLevel

__all__ = [
    "IntegrityResult",
    "OrderSnapshot",
    "OrderStatus",
    "PaymentCallback",
    "RiskLevel",
]
