from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PaymentCallback:
    """Identifiers and signature returned by the gateway after checkout.

    Deliberately unvalidated: callbacks arrive from the client and the
    SignatureVerifier is the one place that judges them, returning a
    structured failure instead of raising on construction.
    """

    order_id: str | None
    payment_id: str | None
    signature: str | None

    @classmethod
    def from_mapping(cls, data: dict[str, object]) -> PaymentCallback:
        """Build a callback from the gateway's checkout handler fields.

        Accepts both the gateway's field names (razorpay_order_id, ...)
        and plain ones (order_id, ...). Absent fields become None.
        """
        return cls(
            order_id=_first_present(data, "razorpay_order_id", "order_id"),
            payment_id=_first_present(data, "razorpay_payment_id", "payment_id"),
            signature=_first_present(data, "razorpay_signature", "signature"),
        )


def _first_present(data: dict[str, object], *keys: str) -> str | None:
    for key in keys:
        value = data.get(key)
        if value is not None:
            return value  # type: ignore[return-value]
    return None
