from payments_security.domain.value_objects import PaymentCallback


class TestPaymentCallbackFromMapping:
    def test_reads_gateway_field_names(self) -> None:
        callback = PaymentCallback.from_mapping(
            {
                "razorpay_order_id": "order_1",
                "razorpay_payment_id": "pay_1",
                "razorpay_signature": "abc123def456",
            }
        )

        assert callback == PaymentCallback("order_1", "pay_1", "abc123def456")

    def test_reads_plain_field_names(self) -> None:
        callback = PaymentCallback.from_mapping(
            {"order_id": "order_1", "payment_id": "pay_1", "signature": "abc123def456"}
        )

        assert callback == PaymentCallback("order_1", "pay_1", "abc123def456")

    def test_gateway_names_take_precedence(self) -> None:
        callback = PaymentCallback.from_mapping(
            {"razorpay_order_id": "order_gateway", "order_id": "order_plain"}
        )

        assert callback.order_id == "order_gateway"

    def test_absent_fields_become_none(self) -> None:
        callback = PaymentCallback.from_mapping({})

        assert callback.order_id is None
        assert callback.payment_id is None
        assert callback.signature is None
