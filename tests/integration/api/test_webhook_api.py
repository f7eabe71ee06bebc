"""
Integration tests for the payment webhook endpoint.
"""
import json
import time
import uuid
from decimal import Decimal

import pytest
from django.urls import reverse

from customers.infrastructure.models import Customer
from licenses.infrastructure.models import License
from payments.infrastructure.models import ProcessedPaymentEvent
from payments.infrastructure.signatures import compute_signature
from products.infrastructure.models import Product
from sales.infrastructure.models import Sale
from subscriptions.infrastructure.models import Subscription


@pytest.fixture
def checkout():
    """A customer with a pending subscription, inactive license and pending sale."""
    customer = Customer.objects.create(email="buyer@example.com", full_name="Ada Buyer")
    product = Product.objects.create(
        sku=f"PRO-{uuid.uuid4().hex[:6]}",
        name="Backup Suite",
        price=Decimal("49.00"),
        subscription_type="annual",
        max_activations=3,
    )
    subscription = Subscription.objects.create(
        customer=customer,
        product=product,
        subscription_type="annual",
        amount=Decimal("49.00"),
    )
    license = License.objects.create(
        subscription=subscription,
        customer=customer,
        product=product,
        license_key="LIC-TEST-0000-0000-0001",
        max_activations=3,
    )
    sale = Sale.objects.create(
        subscription=subscription, customer=customer, product=product, amount=Decimal("49.00")
    )
    return {"subscription": subscription, "license": license, "sale": sale}


def _payload(event_type="checkout.session.completed", email="buyer@example.com", event_id="evt_1"):
    return {
        "id": event_id,
        "type": event_type,
        "data": {
            "object": {
                "id": "cs_1",
                "payment_intent": "pi_1",
                "customer_details": {"email": email},
                "receipt_email": email if event_type.startswith("payment_intent") else None,
                "amount_received": 4900,
                "currency": "eur",
            }
        },
    }


def _post(client, payload, **headers):
    return client.post(
        reverse("payment-webhook"),
        data=json.dumps(payload),
        content_type="application/json",
        **headers,
    )


@pytest.mark.django_db
@pytest.mark.integration
class TestPaymentWebhook:
    """Integration tests for the payment webhook."""

    def test_get_reports_active(self, client):
        response = client.get(reverse("payment-webhook"))

        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_success_event_activates_everything(self, client, checkout):
        response = _post(client, _payload())

        assert response.status_code == 200
        assert response.json() == {"received": True}

        checkout["subscription"].refresh_from_db()
        checkout["license"].refresh_from_db()
        checkout["sale"].refresh_from_db()
        assert checkout["subscription"].status == "active"
        assert checkout["subscription"].payment_status == "paid"
        assert checkout["license"].status == "active"
        assert checkout["license"].current_activations == 1
        assert checkout["sale"].payment_status == "paid"
        assert checkout["sale"].payment_reference == "pi_1"
        assert Sale.objects.count() == 1

    def test_failure_event_marks_subscription(self, client, checkout):
        response = _post(client, _payload(event_type="payment_intent.payment_failed"))

        assert response.status_code == 200
        checkout["subscription"].refresh_from_db()
        assert checkout["subscription"].status == "pending"
        assert checkout["subscription"].payment_status == "failed"

    def test_unknown_customer_is_acknowledged(self, client, checkout):
        response = _post(client, _payload(email="stranger@example.com"))

        assert response.status_code == 200
        checkout["subscription"].refresh_from_db()
        assert checkout["subscription"].status == "pending"

    def test_unhandled_type_is_acknowledged(self, client):
        response = _post(client, {"id": "evt_2", "type": "invoice.created"})

        assert response.status_code == 200
        assert response.json() == {"received": True}

    def test_invalid_json(self, client):
        response = client.post(
            reverse("payment-webhook"), data="{not json", content_type="application/json"
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid JSON"}

    def test_missing_data_object(self, client):
        response = _post(client, {"id": "evt_3", "type": "payment_intent.succeeded"})

        assert response.status_code == 400

    def test_signature_required_when_secret_configured(self, client, checkout, settings):
        settings.PAYMENT_EVENTS = {**settings.PAYMENT_EVENTS, "WEBHOOK_SECRET": "whsec_test"}
        body = json.dumps(_payload()).encode()
        timestamp = int(time.time())
        signature = compute_signature("whsec_test", timestamp, body)

        rejected = client.post(
            reverse("payment-webhook"), data=body, content_type="application/json"
        )
        accepted = client.post(
            reverse("payment-webhook"),
            data=body,
            content_type="application/json",
            HTTP_STRIPE_SIGNATURE=f"t={timestamp},v1={signature}",
        )

        assert rejected.status_code == 400
        assert accepted.status_code == 200
        checkout["subscription"].refresh_from_db()
        assert checkout["subscription"].status == "active"

    def test_ledger_suppresses_redelivery(self, client, checkout, settings):
        settings.PAYMENT_EVENTS = {**settings.PAYMENT_EVENTS, "DEDUPLICATE": True}

        first = _post(client, _payload())
        second = _post(client, _payload())

        assert (first.status_code, second.status_code) == (200, 200)
        assert ProcessedPaymentEvent.objects.filter(event_id="evt_1").count() == 1
        assert Sale.objects.count() == 1
