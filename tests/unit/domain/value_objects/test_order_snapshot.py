from datetime import UTC, datetime

from payments_security.domain.value_objects import IntegrityResult, OrderSnapshot, OrderStatus


def _order(**overrides: object) -> OrderSnapshot:
    fields: dict = {
        "id": "order_1",
        "amount_minor_units": 10000,
        "currency": "INR",
        "status": OrderStatus.CREATED,
        "created_at_epoch_seconds": 1705320000,
    }
    fields.update(overrides)
    return OrderSnapshot(**fields)


class TestOrderSnapshot:
    def test_created_at_is_utc_datetime(self) -> None:
        order = _order()

        assert order.created_at == datetime(2024, 1, 15, 12, 0, 0, tzinfo=UTC)
        assert order.created_at.tzinfo is UTC

    def test_unpaid_order_has_no_payments(self) -> None:
        order = _order()

        assert order.has_payments is False
        assert order.is_partially_paid is False

    def test_partial_payment(self) -> None:
        order = _order(amount_paid=2500, amount_due=7500)

        assert order.has_payments is True
        assert order.is_partially_paid is True

    def test_full_payment_is_not_partial(self) -> None:
        order = _order(status=OrderStatus.PAID, amount_paid=10000)

        assert order.has_payments is True
        assert order.is_partially_paid is False

    def test_status_parses_gateway_strings(self) -> None:
        assert OrderStatus("created") is OrderStatus.CREATED
        assert OrderStatus("paid") is OrderStatus.PAID


class TestIntegrityResult:
    def test_valid_when_every_check_passes(self) -> None:
        result = IntegrityResult(checks={"amount": True, "currency": True})

        assert result.is_valid is True
        assert result.failed_checks == []

    def test_failed_checks_keep_evaluation_order(self) -> None:
        result = IntegrityResult(
            checks={"amount": False, "currency": True, "status": False, "timestamp": True}
        )

        assert result.is_valid is False
        assert result.failed_checks == ["amount", "status"]
