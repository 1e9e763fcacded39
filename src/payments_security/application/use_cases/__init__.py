"""Use cases - Application entry points consumed by the booking flow."""

from payments_security.application.use_cases.payment_orchestrator import PaymentOrchestrator

__all__ = [
    "PaymentOrchestrator",
]
