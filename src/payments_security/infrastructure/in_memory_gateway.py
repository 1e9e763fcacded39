from __future__ import annotations

import secrets
from dataclasses import replace
from typing import TYPE_CHECKING, Any

from payments_security.application.ports import (
    OrderHandle,
    PaymentGateway,
    PaymentRecord,
    RefundRecord,
)
from payments_security.domain.exceptions import (
    GatewayResponseError,
    OrderNotFoundError,
    UpstreamError,
)
from payments_security.domain.value_objects import OrderSnapshot, OrderStatus

if TYPE_CHECKING:
    from payments_security.application.ports import TimeProvider


class InMemoryPaymentGateway(PaymentGateway):
    """Gateway double holding orders in a dict.

    Implementation notes:
    - Orders are created in CREATED state with created_at from the TimeProvider
    - add_order() seeds arbitrary snapshots (paid, expired, stale, ...)
    - fail_next() makes the next call raise the given UpstreamError
    - Refunds are only accepted for payments captured through this double
    - Records every call in `calls` as (operation, argument) tuples
    """

    def __init__(self, time_provider: TimeProvider) -> None:
        self._time_provider = time_provider
        self._orders: dict[str, OrderSnapshot] = {}
        self._payments: dict[str, PaymentRecord] = {}
        self._pending_failure: UpstreamError | None = None
        self.calls: list[tuple[str, str]] = []

    def add_order(self, order: OrderSnapshot) -> None:
        self._orders[order.id] = order

    def fail_next(self, error: UpstreamError) -> None:
        self._pending_failure = error

    def create_order(
        self,
        amount_minor_units: int,
        currency: str,
        receipt: str,
        notes: dict[str, Any] | None = None,
    ) -> OrderHandle:
        self._record_call("create_order", receipt)
        created_at = int(self._time_provider.now().timestamp())
        order = OrderSnapshot(
            id=f"order_{secrets.token_hex(7)}",
            amount_minor_units=amount_minor_units,
            currency=currency,
            status=OrderStatus.CREATED,
            created_at_epoch_seconds=created_at,
            amount_paid=0,
            amount_due=amount_minor_units,
            receipt=receipt,
            notes=dict(notes or {}),
        )
        self._orders[order.id] = order
        return OrderHandle(
            id=order.id,
            amount_minor_units=order.amount_minor_units,
            currency=order.currency,
            receipt=order.receipt,
            status=order.status.value,
            created_at_epoch_seconds=created_at,
        )

    def fetch_order(self, order_id: str) -> OrderSnapshot:
        self._record_call("fetch_order", order_id)
        order = self._orders.get(order_id)
        if order is None:
            raise OrderNotFoundError(f"Order not found: {order_id}", status_code=404)
        return order

    def capture_payment(
        self,
        payment_id: str,
        amount_minor_units: int,
        currency: str,
    ) -> PaymentRecord:
        self._record_call("capture_payment", payment_id)
        payment = PaymentRecord(
            id=payment_id,
            amount_minor_units=amount_minor_units,
            currency=currency,
            status="captured",
            captured=True,
        )
        self._payments[payment_id] = payment
        return payment

    def refund_payment(
        self,
        payment_id: str,
        amount_minor_units: int,
        reason: str,
    ) -> RefundRecord:
        self._record_call("refund_payment", payment_id)
        payment = self._payments.get(payment_id)
        if payment is None:
            raise GatewayResponseError(
                f"Payment not captured: {payment_id}", status_code=404
            )
        return RefundRecord(
            id=f"rfnd_{secrets.token_hex(7)}",
            payment_id=payment_id,
            amount_minor_units=amount_minor_units,
            currency=payment.currency,
            status="processed",
            notes={"reason": reason},
        )

    def mark_paid(self, order_id: str) -> None:
        """Move a stored order to PAID, as the gateway does after checkout."""
        order = self._orders[order_id]
        self._orders[order_id] = replace(
            order,
            status=OrderStatus.PAID,
            amount_paid=order.amount_minor_units,
            amount_due=0,
        )

    def _record_call(self, operation: str, argument: str) -> None:
        self.calls.append((operation, argument))
        if self._pending_failure is not None:
            error, self._pending_failure = self._pending_failure, None
            raise error
