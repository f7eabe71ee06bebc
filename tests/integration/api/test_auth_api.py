"""
Integration tests for authentication endpoints.
"""
import pytest
from django.urls import reverse

from core.domain.value_objects import UserRole
from customers.infrastructure.models import Customer


@pytest.mark.django_db
@pytest.mark.integration
class TestAuthAPI:
    """Integration tests for sign-in, sign-up and identity resolution."""

    def test_signup_creates_customer(self, api_client):
        response = api_client.post(
            reverse("signup"),
            {"email": "jane@example.com", "password": "hunter22", "fullName": "Jane Roe"},
            format="json",
        )

        assert response.status_code == 201
        customer = Customer.objects.get(email="jane@example.com")
        assert str(customer.id) == response.data["customerId"]
        assert customer.auth_user_id == response.data["userId"]

    def test_signup_missing_fields(self, api_client):
        response = api_client.post(reverse("signup"), {"email": "jane@example.com"}, format="json")

        assert response.status_code == 400
        assert response.data["error"]["message"].startswith("Missing required fields")

    def test_signup_duplicate_email(self, api_client, make_account):
        make_account("jane@example.com")

        response = api_client.post(
            reverse("signup"),
            {"email": "jane@example.com", "password": "hunter22", "fullName": "Jane"},
            format="json",
        )

        assert response.status_code == 400
        assert response.data["error"]["code"] == "EMAIL_ALREADY_REGISTERED"

    def test_login_provisions_customer(self, api_client, make_account):
        account = make_account("walkin@example.com", "s3cret!")

        response = api_client.post(
            reverse("login"),
            {"email": "walkin@example.com", "password": "s3cret!"},
            format="json",
        )

        assert response.status_code == 200
        assert response.data["kind"] == "customer"
        customer = Customer.objects.get(email="walkin@example.com")
        assert customer.full_name == "walkin"
        assert customer.auth_user_id == account.subject_id

    def test_login_wrong_password(self, api_client, make_account):
        make_account("walkin@example.com", "s3cret!")

        response = api_client.post(
            reverse("login"),
            {"email": "walkin@example.com", "password": "nope"},
            format="json",
        )

        assert response.status_code == 401
        assert response.data["error"]["code"] == "INVALID_CREDENTIALS"

    def test_me_for_staff(self, staff_client):
        client = staff_client(UserRole.SUPER_ADMIN)

        response = client.get(reverse("me"))

        assert response.status_code == 200
        assert response.data["kind"] == "staff"
        assert response.data["profile"]["role"] == "super_admin"

    def test_me_requires_session(self, api_client):
        response = api_client.get(reverse("me"))

        assert response.status_code == 401

    def test_logout(self, staff_client):
        client = staff_client(UserRole.STAFF)

        assert client.post(reverse("logout")).status_code == 204
        assert client.get(reverse("me")).status_code == 401
