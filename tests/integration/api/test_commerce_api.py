"""
Integration tests for checkout, trial, license and sales endpoints.
"""
import uuid
from decimal import Decimal

import pytest
from django.urls import reverse

from core.domain.value_objects import UserRole
from customers.infrastructure.models import Customer
from licenses.infrastructure.models import License
from products.infrastructure.models import Product
from sales.infrastructure.models import Sale
from subscriptions.infrastructure.models import Subscription


@pytest.fixture
def customer():
    return Customer.objects.create(email="buyer@example.com", full_name="Ada Buyer")


@pytest.fixture
def product():
    return Product.objects.create(
        sku=f"PRO-{uuid.uuid4().hex[:6]}",
        name="Backup Suite",
        price=Decimal("49.00"),
        subscription_type="annual",
        max_activations=2,
    )


@pytest.fixture
def active_license(customer, product):
    subscription = Subscription.objects.create(
        customer=customer,
        product=product,
        subscription_type="annual",
        status="active",
        payment_status="paid",
        amount=Decimal("49.00"),
    )
    return License.objects.create(
        subscription=subscription,
        customer=customer,
        product=product,
        license_key="LIC-ABCD-EFGH-IJKL-MNOP",
        status="active",
        max_activations=2,
        current_activations=1,
    )


@pytest.mark.django_db
@pytest.mark.integration
class TestCheckoutAPI:
    def test_staff_starts_checkout(self, staff_client, customer, product):
        client = staff_client(UserRole.STAFF)

        response = client.post(
            reverse("start-checkout"),
            {"customer_id": str(customer.id), "product_id": str(product.id)},
            format="json",
        )

        assert response.status_code == 201
        assert response.data["subscription"]["status"] == "pending"
        assert License.objects.get(id=response.data["license_id"]).status == "inactive"
        assert Sale.objects.get(id=response.data["sale_id"]).payment_status == "pending"

    def test_unknown_product(self, staff_client, customer):
        client = staff_client(UserRole.STAFF)

        response = client.post(
            reverse("start-checkout"),
            {"customer_id": str(customer.id), "product_id": str(uuid.uuid4())},
            format="json",
        )

        assert response.status_code == 404

    def test_trials_state_validated(self, staff_client):
        client = staff_client(UserRole.STAFF)

        assert client.get(reverse("list-trials"), {"state": "expired"}).status_code == 200
        assert client.get(reverse("list-trials"), {"state": "soon"}).status_code == 400


@pytest.mark.django_db
@pytest.mark.integration
class TestLicenseAPI:
    def test_activate_seat_with_header(self, api_client, active_license):
        response = api_client.post(
            reverse("activate-seat"),
            {},
            format="json",
            HTTP_X_LICENSE_KEY=active_license.license_key,
        )

        assert response.status_code == 200
        assert response.data["current_activations"] == 2
        assert response.data["seats_remaining"] == 0

    def test_activate_seat_limit(self, api_client, active_license):
        body = {"license_key": active_license.license_key}
        api_client.post(reverse("activate-seat"), body, format="json")

        response = api_client.post(reverse("activate-seat"), body, format="json")

        assert response.status_code == 400
        assert response.data["error"]["code"] == "SEAT_LIMIT_EXCEEDED"

    def test_activate_seat_without_key(self, api_client):
        assert api_client.post(reverse("activate-seat"), {}, format="json").status_code == 400

    def test_staff_revokes(self, staff_client, active_license):
        client = staff_client(UserRole.STAFF)

        response = client.post(reverse("revoke-license", args=[active_license.id]))

        assert response.status_code == 200
        active_license.refresh_from_db()
        assert active_license.status == "revoked"


@pytest.mark.django_db
@pytest.mark.integration
class TestProcessPaymentAPI:
    def test_admin_processes_payment(self, staff_client, product):
        client = staff_client(UserRole.ADMIN)

        response = client.post(
            reverse("process-payment"),
            {"customer_email": "walkin@example.com", "product_sku": product.sku},
            format="json",
        )

        assert response.status_code == 201
        assert Customer.objects.filter(email="walkin@example.com").exists()
        assert Sale.objects.get(id=response.data["sale_id"]).payment_status == "paid"

    def test_staff_refused(self, staff_client, product):
        client = staff_client(UserRole.STAFF)

        response = client.post(
            reverse("process-payment"),
            {"customer_email": "walkin@example.com", "product_sku": product.sku},
            format="json",
        )

        assert response.status_code == 403

    def test_unknown_sku(self, staff_client):
        client = staff_client(UserRole.ADMIN)

        response = client.post(
            reverse("process-payment"),
            {"customer_email": "walkin@example.com", "product_sku": "NOPE"},
            format="json",
        )

        assert response.status_code == 404
