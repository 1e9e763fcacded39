"""Infrastructure layer - Concrete implementations of ports.

This layer contains:
- Attempt Store: In-memory per-actor attempt records
- Locking: Per-actor locks serializing rate-limit decisions
- Time Provider: Clock abstraction for testability
- Gateways: Razorpay REST adapter and an in-memory double
- Logging: structlog configuration

Infrastructure adapters implement the ports defined in the application layer.
"""

from payments_security.infrastructure.attempt_store import InMemoryAttemptStore
from payments_security.infrastructure.in_memory_gateway import InMemoryPaymentGateway
from payments_security.infrastructure.lock_provider import InMemoryLockProvider, NoOpLockProvider
from payments_security.infrastructure.log_config import configure_logging
from payments_security.infrastructure.razorpay_gateway import RazorpayGateway
from payments_security.infrastructure.time_provider import FixedTimeProvider, SystemTimeProvider

__all__ = [
    "FixedTimeProvider",
    "InMemoryAttemptStore",
    "InMemoryLockProvider",
    "InMemoryPaymentGateway",
    "NoOpLockProvider",
    "RazorpayGateway",
    "SystemTimeProvider",
    "configure_logging",
]
