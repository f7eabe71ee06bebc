"""
Integration tests for the Django identity provider.
"""
import pytest
from asgiref.sync import async_to_sync

from accounts.infrastructure.django_identity_provider import DjangoIdentityProvider
from core.domain.exceptions import UserAlreadyExistsError


@pytest.fixture
def provider():
    return DjangoIdentityProvider()


@pytest.mark.django_db
@pytest.mark.integration
class TestDjangoIdentityProvider:
    """Integration tests for DjangoIdentityProvider."""

    def test_create_and_authenticate(self, provider):
        created = async_to_sync(provider.create_user)(
            "Ops@Example.com", "s3cret!", {"user_type": "staff"}
        )

        assert created.email == "ops@example.com"
        assert created.metadata["user_type"] == "staff"
        assert created.metadata["email_confirmed"] is True

        authenticated = async_to_sync(provider.authenticate)("ops@example.com", "s3cret!")
        assert authenticated.subject_id == created.subject_id
        assert async_to_sync(provider.authenticate)("ops@example.com", "wrong") is None

    def test_duplicate_email(self, provider):
        async_to_sync(provider.create_user)("ops@example.com", "s3cret!", {})

        with pytest.raises(UserAlreadyExistsError):
            async_to_sync(provider.create_user)("OPS@example.com", "other!", {})

    def test_lookups(self, provider):
        created = async_to_sync(provider.create_user)("ops@example.com", "s3cret!", {})

        assert async_to_sync(provider.find_user_by_email)("OPS@EXAMPLE.COM") == created
        assert async_to_sync(provider.get_user)(created.subject_id) == created
        assert async_to_sync(provider.get_user)("not-a-pk") is None
        assert async_to_sync(provider.find_user_by_email)("nobody@example.com") is None
