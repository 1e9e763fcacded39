"""Entrypoints layer - Composition root for host applications.

The booking flow builds one PaymentOrchestrator at startup and calls
authorize_attempt() / confirm_payment() on it per request.
"""

from payments_security.entrypoints.container import build_payment_orchestrator

__all__ = [
    "build_payment_orchestrator",
]
