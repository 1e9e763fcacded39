"""Order integrity validation.

Cross-checks a gateway order snapshot against the amount and currency the
booking flow expects, and rejects orders that are no longer fresh or no
longer in the created state. Pure: the caller supplies `now`.
"""

from __future__ import annotations

from datetime import timedelta
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import TYPE_CHECKING

from payments_security.domain.value_objects import IntegrityResult, OrderStatus

if TYPE_CHECKING:
    from datetime import datetime

    from payments_security.domain.value_objects import OrderSnapshot

MINOR_UNITS_PER_MAJOR = 100
DEFAULT_AMOUNT_TOLERANCE_MINOR_UNITS = 1
DEFAULT_ORDER_FRESHNESS_WINDOW = timedelta(minutes=30)

CHECK_AMOUNT = "amount"
CHECK_CURRENCY = "currency"
CHECK_STATUS = "status"
CHECK_TIMESTAMP = "timestamp"


def to_minor_units(amount_major_units: Decimal | int | float | str) -> Decimal:
    """Convert a major-unit amount to minor units without float drift.

    Floats go through str() so that 499.99 becomes exactly 49999.

    Raises:
        ValueError: If the amount is not a finite number.
    """
    if isinstance(amount_major_units, float):
        amount_major_units = str(amount_major_units)
    try:
        amount = Decimal(amount_major_units)
    except (InvalidOperation, TypeError, ValueError) as e:
        raise ValueError(f"Invalid amount: {amount_major_units!r}") from e
    if not amount.is_finite():
        raise ValueError(f"Invalid amount: {amount_major_units!r}")
    return amount * MINOR_UNITS_PER_MAJOR


def to_integer_minor_units(amount_major_units: Decimal | int | float | str) -> int:
    """Minor units rounded half-up, as sent to the gateway."""
    return int(to_minor_units(amount_major_units).to_integral_value(rounding=ROUND_HALF_UP))


def amount_matches(
    amount_minor_units: int,
    expected_amount_major_units: Decimal | int | float | str,
    tolerance_minor_units: int = DEFAULT_AMOUNT_TOLERANCE_MINOR_UNITS,
) -> bool:
    """Check the order amount is within `tolerance_minor_units` of expected.

    A difference of exactly the tolerance passes; one more fails. An
    expected amount that is not a finite number never matches.
    """
    try:
        expected_minor_units = to_minor_units(expected_amount_major_units)
    except ValueError:
        return False
    difference = abs(Decimal(amount_minor_units) - expected_minor_units)
    return difference <= tolerance_minor_units


class IntegrityChecker:
    """Validates an order snapshot against expected business values.

    Four named checks, all of which must pass:
    - amount: within tolerance of expected × 100
    - currency: exact match
    - status: order is still in the created (unpaid) state
    - timestamp: order age is under the freshness window (replay guard)
    """

    def __init__(
        self,
        amount_tolerance_minor_units: int = DEFAULT_AMOUNT_TOLERANCE_MINOR_UNITS,
        order_freshness_window: timedelta = DEFAULT_ORDER_FRESHNESS_WINDOW,
    ) -> None:
        self._amount_tolerance = amount_tolerance_minor_units
        self._freshness_window = order_freshness_window

    def validate_order_integrity(
        self,
        order: OrderSnapshot,
        expected_amount_major_units: Decimal | int | float | str,
        expected_currency: str,
        now: datetime,
    ) -> IntegrityResult:
        """Run every check and report each outcome.

        Args:
            order: Snapshot fetched from the gateway by the caller.
            expected_amount_major_units: Amount the booking flow charged.
            expected_currency: ISO-4217 code the booking flow charged in.
            now: Current UTC time.

        Returns:
            IntegrityResult with all four checks, in evaluation order.
        """
        return IntegrityResult(
            checks={
                CHECK_AMOUNT: amount_matches(
                    order.amount_minor_units,
                    expected_amount_major_units,
                    self._amount_tolerance,
                ),
                CHECK_CURRENCY: order.currency == expected_currency,
                CHECK_STATUS: order.status == OrderStatus.CREATED,
                CHECK_TIMESTAMP: now - order.created_at < self._freshness_window,
            }
        )


def validate_order_integrity(
    order: OrderSnapshot,
    expected_amount_major_units: Decimal | int | float | str,
    expected_currency: str,
    now: datetime,
) -> IntegrityResult:
    """Validate with the default tolerance and freshness window."""
    return IntegrityChecker().validate_order_integrity(
        order, expected_amount_major_units, expected_currency, now
    )
