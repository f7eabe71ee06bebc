"""
Integration tests for staff management endpoints.
"""
import pytest
from django.urls import reverse

from accounts.infrastructure.models import Profile
from core.domain.value_objects import UserRole


def _new_staff(role=None):
    body = {"email": "new.hire@backoffice.example.com", "password": "s3cret!", "fullName": "New"}
    if role:
        body["role"] = role
    return body


@pytest.mark.django_db
@pytest.mark.integration
class TestStaffAPI:
    """Integration tests for the staff endpoints."""

    def test_admin_creates_staff(self, staff_client):
        client = staff_client(UserRole.ADMIN)

        response = client.post(reverse("staff"), _new_staff(), format="json")

        assert response.status_code == 200
        assert response.data["success"] is True
        assert response.data["profile"]["role"] == "staff"
        assert Profile.objects.filter(email="new.hire@backoffice.example.com").exists()

    def test_admin_cannot_create_admin(self, staff_client):
        client = staff_client(UserRole.ADMIN)

        response = client.post(reverse("staff"), _new_staff("admin"), format="json")

        assert response.status_code == 403

    def test_short_password(self, staff_client):
        client = staff_client(UserRole.SUPER_ADMIN)
        body = {**_new_staff(), "password": "12345"}

        response = client.post(reverse("staff"), body, format="json")

        assert response.status_code == 400
        assert "at least 6 characters" in response.data["error"]["message"]

    def test_duplicate_email(self, staff_client):
        client = staff_client(UserRole.SUPER_ADMIN)
        client.post(reverse("staff"), _new_staff(), format="json")

        response = client.post(reverse("staff"), _new_staff(), format="json")

        assert response.status_code == 400

    def test_list_staff(self, staff_client):
        client = staff_client(UserRole.ADMIN)

        response = client.get(reverse("staff"))

        assert response.status_code == 200
        assert response.data["creatableRoles"] == ["staff"]
        assert [member["email"] for member in response.data["staff"]] == [
            "admin@backoffice.example.com"
        ]

    def test_super_admin_cannot_delete_super_admin(self, staff_client):
        client = staff_client(UserRole.SUPER_ADMIN)
        peer = Profile.objects.create(
            id="peer", email="peer@backoffice.example.com", full_name="Peer", role="super_admin"
        )

        response = client.delete(reverse("staff-member", args=[peer.id]))

        assert response.status_code == 403
        assert Profile.objects.filter(id="peer").exists()

    def test_admin_deletes_staff(self, staff_client):
        client = staff_client(UserRole.ADMIN)
        target = Profile.objects.create(
            id="target", email="t@backoffice.example.com", full_name="T", role="staff"
        )

        response = client.delete(reverse("staff-member", args=[target.id]))

        assert response.status_code == 204
        assert not Profile.objects.filter(id=target.id).exists()

    def test_update_staff(self, staff_client):
        client = staff_client(UserRole.ADMIN)
        target = Profile.objects.create(
            id="target", email="t@backoffice.example.com", full_name="T", role="staff"
        )

        response = client.patch(
            reverse("staff-member", args=[target.id]), {"isActive": False}, format="json"
        )

        assert response.status_code == 200
        assert response.data["isActive"] is False

    def test_missing_profile(self, staff_client):
        client = staff_client(UserRole.SUPER_ADMIN)

        response = client.delete(reverse("staff-member", args=["ghost"]))

        assert response.status_code == 404

    def test_anonymous_refused(self, api_client):
        assert api_client.get(reverse("staff")).status_code == 401
