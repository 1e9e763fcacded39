"""Read-only view of a gateway order.

Amounts are integers in minor units (paise, cents). Timestamps are epoch
seconds as reported by the gateway.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any


class OrderStatus(Enum):
    """Gateway order lifecycle states."""

    CREATED = "created"
    ATTEMPTED = "attempted"
    PAID = "paid"
    EXPIRED = "expired"


@dataclass(frozen=True, slots=True)
class OrderSnapshot:
    """Gateway's authoritative view of an order, fetched on demand.

    Not owned or mutated by this library.
    """

    id: str
    amount_minor_units: int
    currency: str
    status: OrderStatus
    created_at_epoch_seconds: int
    amount_paid: int = 0
    amount_due: int = 0
    receipt: str | None = None
    notes: dict[str, Any] = field(default_factory=dict)

    @property
    def created_at(self) -> datetime:
        return datetime.fromtimestamp(self.created_at_epoch_seconds, tz=UTC)

    @property
    def has_payments(self) -> bool:
        return self.amount_paid > 0

    @property
    def is_partially_paid(self) -> bool:
        return 0 < self.amount_paid < self.amount_minor_units
