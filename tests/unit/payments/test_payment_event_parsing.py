"""
Unit tests for payment event parsing.
"""
import pytest

from core.domain.exceptions import InvalidPaymentEventError
from payments.domain.payment_event import (
    PaymentFailed,
    PaymentSucceeded,
    UnhandledPaymentEvent,
    parse_payment_event,
)


def _event(event_type, obj, event_id="evt_1"):
    return {"id": event_id, "type": event_type, "data": {"object": obj}}


class TestParsePaymentEvent:
    """Tests for parse_payment_event."""

    def test_checkout_completed(self):
        event = parse_payment_event(
            _event(
                "checkout.session.completed",
                {
                    "id": "cs_1",
                    "payment_intent": "pi_1",
                    "customer_details": {"email": "buyer@example.com"},
                    "amount_received": 4900,
                    "currency": "eur",
                },
            )
        )

        assert isinstance(event, PaymentSucceeded)
        assert event.customer_email == "buyer@example.com"
        assert event.amount_received == 4900
        assert event.payment_reference == "pi_1"
        assert event.event_id == "evt_1"

    def test_email_precedence(self):
        event = parse_payment_event(
            _event(
                "payment_intent.succeeded",
                {
                    "id": "pi_2",
                    "receipt_email": "receipt@example.com",
                    "billing_details": {"email": "billing@example.com"},
                    "customer_details": {"email": "details@example.com"},
                },
            )
        )

        assert event.customer_email == "receipt@example.com"
        assert event.payment_reference == "pi_2"

    def test_billing_email_fallback(self):
        event = parse_payment_event(
            _event(
                "payment_intent.succeeded",
                {"customer_email": "  ", "billing_details": {"email": "billing@example.com"}},
            )
        )

        assert event.customer_email == "billing@example.com"

    def test_failure_ignores_customer_details(self):
        event = parse_payment_event(
            _event(
                "payment_intent.payment_failed",
                {"id": "pi_3", "customer_details": {"email": "details@example.com"}},
            )
        )

        assert isinstance(event, PaymentFailed)
        assert event.customer_email is None
        assert event.payment_reference == "pi_3"

    @pytest.mark.parametrize("amount", [True, "4900", None])
    def test_non_numeric_amount_dropped(self, amount):
        event = parse_payment_event(
            _event("payment_intent.succeeded", {"amount_received": amount})
        )

        assert event.amount_received is None

    def test_unhandled_type(self):
        event = parse_payment_event({"id": "evt_9", "type": "invoice.created"})

        assert event == UnhandledPaymentEvent(event_type="invoice.created", event_id="evt_9")

    @pytest.mark.parametrize(
        "payload",
        [
            [],
            {"data": {"object": {}}},
            {"type": "payment_intent.succeeded"},
            {"type": "payment_intent.succeeded", "data": {"object": "pi_1"}},
        ],
    )
    def test_invalid_payloads(self, payload):
        with pytest.raises(InvalidPaymentEventError):
            parse_payment_event(payload)
