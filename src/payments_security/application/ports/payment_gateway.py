"""Payment gateway port.

Call boundary to the external payment gateway. The wire protocol (HTTPS,
API-key auth, JSON payloads) belongs to the adapter; this module only
pins the request/response contract the orchestrator depends on.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from payments_security.domain.value_objects import OrderSnapshot


@dataclass(frozen=True, slots=True)
class OrderHandle:
    """Result of creating an order at the gateway."""

    id: str
    amount_minor_units: int
    currency: str
    receipt: str | None
    status: str
    created_at_epoch_seconds: int


@dataclass(frozen=True, slots=True)
class PaymentRecord:
    """Result of capturing a payment."""

    id: str
    amount_minor_units: int
    currency: str
    status: str
    captured: bool
    method: str | None = None


@dataclass(frozen=True, slots=True)
class RefundRecord:
    """Result of refunding a payment."""

    id: str
    payment_id: str
    amount_minor_units: int
    currency: str
    status: str
    notes: dict[str, Any] = field(default_factory=dict)


class PaymentGateway(ABC):
    """Port for the external payment gateway.

    Contract:
    - Every operation either returns its record or raises UpstreamError
      (GatewayTimeoutError, GatewayResponseError, OrderNotFoundError)
    - Implementations never retry; a retried capture or refund could move
      money twice
    - Amounts are integers in minor units
    """

    @abstractmethod
    def create_order(
        self,
        amount_minor_units: int,
        currency: str,
        receipt: str,
        notes: dict[str, Any] | None = None,
    ) -> OrderHandle:
        """Create an order the customer will pay against."""

    @abstractmethod
    def fetch_order(self, order_id: str) -> OrderSnapshot:
        """Fetch the gateway's current view of an order.

        Raises:
            OrderNotFoundError: The gateway does not know the order id.
        """

    @abstractmethod
    def capture_payment(
        self,
        payment_id: str,
        amount_minor_units: int,
        currency: str,
    ) -> PaymentRecord:
        """Capture an authorized payment."""

    @abstractmethod
    def refund_payment(
        self,
        payment_id: str,
        amount_minor_units: int,
        reason: str,
    ) -> RefundRecord:
        """Refund (part of) a captured payment."""
