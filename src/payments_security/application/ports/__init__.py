"""Ports - Abstract interfaces for external dependencies.

Ports define the contracts that infrastructure adapters must implement.
This allows the application layer to remain decoupled from concrete implementations.
"""

from payments_security.application.ports.attempt_store import AttemptStore
from payments_security.application.ports.lock_provider import LockProvider
from payments_security.application.ports.payment_gateway import (
    OrderHandle,
    PaymentGateway,
    PaymentRecord,
    RefundRecord,
)
from payments_security.application.ports.time_provider import TimeProvider

__all__ = [
    "AttemptStore",
    "LockProvider",
    "OrderHandle",
    "PaymentGateway",
    "PaymentRecord",
    "RefundRecord",
    "TimeProvider",
]
