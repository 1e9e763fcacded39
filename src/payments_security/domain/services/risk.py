"""Informational risk classification of gateway orders.

Never used to gate a transaction; feeds logging and analytics only.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from payments_security.domain.value_objects import OrderStatus, RiskLevel

if TYPE_CHECKING:
    from datetime import datetime, timedelta

    from payments_security.domain.value_objects import OrderSnapshot

# 10,000.00 in major units
DEFAULT_HIGH_VALUE_THRESHOLD_MINOR_UNITS = 1_000_000


def classify_order_risk(
    order: OrderSnapshot,
    high_value_threshold_minor_units: int = DEFAULT_HIGH_VALUE_THRESHOLD_MINOR_UNITS,
) -> RiskLevel:
    """Derive a coarse risk level from status, amount and payment progress.

    Rules, highest severity wins:
        - expired order → high
        - partially paid order → high
        - amount above the high-value threshold → medium
        - otherwise → low
    """
    levels = [RiskLevel.LOW]
    if order.status == OrderStatus.EXPIRED:
        levels.append(RiskLevel.HIGH)
    if order.is_partially_paid:
        levels.append(RiskLevel.HIGH)
    if order.amount_minor_units > high_value_threshold_minor_units:
        levels.append(RiskLevel.MEDIUM)
    return max(levels, key=lambda level: level.severity)


@dataclass(frozen=True, slots=True)
class OrderSecurityAnalysis:
    """Security-relevant facts about an order at a point in time."""

    order_id: str
    order_age: timedelta
    is_expired: bool
    has_payments: bool
    partial_payment: bool
    risk_level: RiskLevel

    @classmethod
    def of(
        cls,
        order: OrderSnapshot,
        now: datetime,
        high_value_threshold_minor_units: int = DEFAULT_HIGH_VALUE_THRESHOLD_MINOR_UNITS,
    ) -> OrderSecurityAnalysis:
        return cls(
            order_id=order.id,
            order_age=now - order.created_at,
            is_expired=order.status == OrderStatus.EXPIRED,
            has_payments=order.has_payments,
            partial_payment=order.is_partially_paid,
            risk_level=classify_order_risk(order, high_value_threshold_minor_units),
        )
