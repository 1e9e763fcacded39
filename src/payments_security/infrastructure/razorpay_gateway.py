"""Razorpay REST adapter for the PaymentGateway port.

Talks to https://api.razorpay.com/v1 with HTTP basic auth (key id / key
secret). Every transport or HTTP failure is translated into an
UpstreamError subclass; nothing is retried here.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar
from urllib.parse import quote

import httpx
import structlog

from payments_security.application.ports import (
    OrderHandle,
    PaymentGateway,
    PaymentRecord,
    RefundRecord,
)
from payments_security.domain.exceptions import (
    ConfigurationError,
    GatewayResponseError,
    GatewayTimeoutError,
    OrderNotFoundError,
)
from payments_security.domain.value_objects import OrderSnapshot, OrderStatus

if TYPE_CHECKING:
    from collections.abc import Callable

DEFAULT_BASE_URL = "https://api.razorpay.com/v1"
DEFAULT_TIMEOUT_SECONDS = 10.0
ORDERS_PATH = "/orders"

T = TypeVar("T")


class RazorpayGateway(PaymentGateway):
    """PaymentGateway backed by the Razorpay Orders and Payments APIs.

    Usage:
        with RazorpayGateway(key_id, key_secret) as gateway:
            order = gateway.fetch_order("order_9A33XWu170gUtm")
    """

    def __init__(
        self,
        key_id: str,
        key_secret: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        if not key_id or not key_secret:
            raise ConfigurationError("Razorpay credentials not configured")

        self._client = httpx.Client(
            base_url=base_url,
            auth=(key_id, key_secret),
            timeout=timeout_seconds,
            transport=transport,
        )
        self._logger = structlog.get_logger().bind(component="razorpay_gateway")

    def __enter__(self) -> RazorpayGateway:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    # -------------------------------------------------------------------------
    # PaymentGateway
    # -------------------------------------------------------------------------

    def create_order(
        self,
        amount_minor_units: int,
        currency: str,
        receipt: str,
        notes: dict[str, Any] | None = None,
    ) -> OrderHandle:
        payload = self._request(
            "POST",
            ORDERS_PATH,
            json={
                "amount": amount_minor_units,
                "currency": currency,
                "receipt": receipt,
                "notes": {key: str(value) for key, value in (notes or {}).items()},
            },
        )
        handle = _parse(payload, _order_handle)
        self._logger.info(
            "gateway_order_created",
            order_id=handle.id,
            amount_minor_units=handle.amount_minor_units,
            currency=handle.currency,
            receipt=handle.receipt,
        )
        return handle

    def fetch_order(self, order_id: str) -> OrderSnapshot:
        payload = self._request("GET", f"{ORDERS_PATH}/{quote(order_id, safe='')}")
        return _parse(payload, _order_snapshot)

    def capture_payment(
        self,
        payment_id: str,
        amount_minor_units: int,
        currency: str,
    ) -> PaymentRecord:
        payload = self._request(
            "POST",
            f"/payments/{quote(payment_id, safe='')}/capture",
            json={"amount": amount_minor_units, "currency": currency},
        )
        record = _parse(payload, _payment_record)
        self._logger.info(
            "gateway_payment_captured",
            payment_id=record.id,
            amount_minor_units=record.amount_minor_units,
            status=record.status,
        )
        return record

    def refund_payment(
        self,
        payment_id: str,
        amount_minor_units: int,
        reason: str,
    ) -> RefundRecord:
        payload = self._request(
            "POST",
            f"/payments/{quote(payment_id, safe='')}/refund",
            json={"amount": amount_minor_units, "notes": {"reason": reason}},
        )
        record = _parse(payload, _refund_record)
        self._logger.info(
            "gateway_refund_processed",
            refund_id=record.id,
            payment_id=record.payment_id,
            amount_minor_units=record.amount_minor_units,
            status=record.status,
        )
        return record

    # -------------------------------------------------------------------------
    # Transport
    # -------------------------------------------------------------------------

    def _request(
        self,
        method: str,
        path: str,
        json: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        try:
            response = self._client.request(method, path, json=json)
        except httpx.TimeoutException as e:
            self._logger.warning("gateway_timeout", method=method, path=path)
            raise GatewayTimeoutError(f"Gateway timed out on {method} {path}") from e
        except httpx.HTTPError as e:
            self._logger.warning("gateway_transport_error", method=method, path=path, error=str(e))
            raise GatewayResponseError(f"Gateway request failed on {method} {path}: {e}") from e

        if response.status_code == httpx.codes.NOT_FOUND and path.startswith(ORDERS_PATH):
            raise OrderNotFoundError(
                f"Gateway order not found: {path}", status_code=response.status_code
            )

        if response.is_error:
            description = _error_description(response)
            self._logger.warning(
                "gateway_error_response",
                method=method,
                path=path,
                status_code=response.status_code,
                description=description,
            )
            raise GatewayResponseError(
                f"Gateway returned {response.status_code} on {method} {path}: {description}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise GatewayResponseError(
                f"Gateway returned an unparseable body on {method} {path}",
                status_code=response.status_code,
            ) from e

        if not isinstance(payload, dict):
            raise GatewayResponseError(
                f"Gateway returned a non-object body on {method} {path}",
                status_code=response.status_code,
            )
        return payload


# =============================================================================
# Payload parsing
# =============================================================================


def _parse(payload: dict[str, Any], parser: Callable[[dict[str, Any]], T]) -> T:
    try:
        return parser(payload)
    except (KeyError, TypeError, ValueError) as e:
        raise GatewayResponseError(f"Unexpected gateway payload: {e!r}") from e


def _notes(payload: dict[str, Any]) -> dict[str, Any]:
    # The API encodes empty notes as [] rather than {}.
    notes = payload.get("notes") or {}
    return dict(notes) if isinstance(notes, dict) else {}


def _order_handle(payload: dict[str, Any]) -> OrderHandle:
    return OrderHandle(
        id=str(payload["id"]),
        amount_minor_units=int(payload["amount"]),
        currency=str(payload["currency"]),
        receipt=payload.get("receipt"),
        status=str(payload["status"]),
        created_at_epoch_seconds=int(payload["created_at"]),
    )


def _order_snapshot(payload: dict[str, Any]) -> OrderSnapshot:
    amount = int(payload["amount"])
    amount_paid = int(payload.get("amount_paid") or 0)
    return OrderSnapshot(
        id=str(payload["id"]),
        amount_minor_units=amount,
        currency=str(payload["currency"]),
        status=OrderStatus(payload["status"]),
        created_at_epoch_seconds=int(payload["created_at"]),
        amount_paid=amount_paid,
        amount_due=int(payload.get("amount_due", amount - amount_paid)),
        receipt=payload.get("receipt"),
        notes=_notes(payload),
    )


def _payment_record(payload: dict[str, Any]) -> PaymentRecord:
    return PaymentRecord(
        id=str(payload["id"]),
        amount_minor_units=int(payload["amount"]),
        currency=str(payload["currency"]),
        status=str(payload["status"]),
        captured=bool(payload.get("captured", False)),
        method=payload.get("method"),
    )


def _refund_record(payload: dict[str, Any]) -> RefundRecord:
    return RefundRecord(
        id=str(payload["id"]),
        payment_id=str(payload["payment_id"]),
        amount_minor_units=int(payload["amount"]),
        currency=str(payload["currency"]),
        status=str(payload["status"]),
        notes=_notes(payload),
    )


def _error_description(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text[:200]
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        return str(body["error"].get("description", "unknown error"))
    return "unknown error"
