"""
Pytest configuration and shared fixtures.

Unit tests run against ``InMemoryRecordStore``; integration tests use the
Django-backed store configured in the test settings.
"""

import asyncio
import uuid
from dataclasses import replace
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, Optional

import pytest

from accounts.domain.identity import IdentityUser, ResolvedIdentity
from accounts.domain.profile import Profile
from accounts.infrastructure.repositories.store_profile_repository import (
    StoreProfileRepository,
)
from accounts.ports.identity_provider import IdentityProvider
from core.domain.exceptions import IdentityProviderError, UserAlreadyExistsError
from core.domain.value_objects import IdentityKind, SubscriptionType, UserRole
from core.infrastructure.events import InMemoryEventBus
from core.infrastructure.memory_store import InMemoryRecordStore
from core.ports.record_store import Collections
from customers.domain.customer import Customer
from customers.infrastructure.repositories.store_customer_repository import (
    StoreCustomerRepository,
)
from licenses.domain.license import License
from licenses.infrastructure.repositories.store_license_repository import StoreLicenseRepository
from payments.infrastructure.repositories.store_processed_event_repository import (
    StoreProcessedEventRepository,
)
from products.infrastructure.repositories.store_product_repository import StoreProductRepository
from sales.infrastructure.repositories.store_sale_repository import StoreSaleRepository
from subscriptions.domain.subscription import Subscription
from subscriptions.infrastructure.repositories.store_subscription_repository import (
    StoreSubscriptionRepository,
)


class FakeIdentityProvider(IdentityProvider):
    """Identity provider double keeping accounts in a dict."""

    def __init__(self, fail_create: Optional[Exception] = None):
        self.users: Dict[str, IdentityUser] = {}
        self.passwords: Dict[str, str] = {}
        self.fail_create = fail_create

    def add(self, email: str, password: str = "secret123", **metadata: Any) -> IdentityUser:
        user = IdentityUser(subject_id=str(uuid.uuid4()), email=email, metadata=metadata)
        self.users[user.subject_id] = user
        self.passwords[user.subject_id] = password
        return user

    async def create_user(self, email, password, metadata, email_confirm=True):
        if self.fail_create is not None:
            raise self.fail_create
        if await self.find_user_by_email(email) is not None:
            raise UserAlreadyExistsError(f"An account already exists for {email}")
        return self.add(email, password, **metadata)

    async def find_user_by_email(self, email):
        return next(
            (user for user in self.users.values() if user.email == email.strip().lower()), None
        )

    async def get_user(self, subject_id):
        return self.users.get(subject_id)

    async def authenticate(self, email, password):
        user = await self.find_user_by_email(email)
        if user is None or self.passwords[user.subject_id] != password:
            return None
        return user


@pytest.fixture
def store():
    """Fixture for an empty in-memory record store."""
    return InMemoryRecordStore()


@pytest.fixture
def bus():
    """Fixture for an event bus with no subscribers."""
    return InMemoryEventBus()


@pytest.fixture
def customer_repository(store):
    return StoreCustomerRepository(store)


@pytest.fixture
def product_repository(store):
    return StoreProductRepository(store)


@pytest.fixture
def subscription_repository(store):
    return StoreSubscriptionRepository(store)


@pytest.fixture
def license_repository(store):
    return StoreLicenseRepository(store)


@pytest.fixture
def sale_repository(store):
    return StoreSaleRepository(store)


@pytest.fixture
def profile_repository(store):
    return StoreProfileRepository(store)


@pytest.fixture
def processed_event_repository(store):
    return StoreProcessedEventRepository(store)


@pytest.fixture
def identity_provider():
    """Fixture for the in-memory identity provider."""
    return FakeIdentityProvider()


def product_values() -> Dict[str, Any]:
    """Column values for a new product row."""
    return {
        "id": uuid.uuid4(),
        "sku": f"PRO-{uuid.uuid4().hex[:6].upper()}",
        "name": "Backup Suite Pro",
        "price": Decimal("49.00"),
        "currency": "EUR",
        "subscription_type": SubscriptionType.ANNUAL.value,
        "trial_days": None,
        "max_activations": 3,
        "is_active": True,
        "created_at": datetime.now(timezone.utc),
    }


def insert_product(store, **overrides) -> Dict[str, Any]:
    """Insert a product row and return it."""
    row = product_values()
    row.update(overrides)
    return asyncio.run(store.insert(Collections.PRODUCTS, row))


@pytest.fixture
def product_row(store):
    """Fixture for a product saved in the store."""
    return insert_product(store)


@pytest.fixture
def customer(customer_repository):
    """Fixture for a customer saved in the store."""
    return asyncio.run(
        customer_repository.save(Customer.create(email="buyer@example.com", full_name="Ada Buyer"))
    )


def pending_subscription_for(
    customer, product_row, created_at=None, amount=Decimal("49.00")
) -> Subscription:
    """Build a pending subscription for the customer."""
    subscription = Subscription.create(
        customer_id=customer.id,
        product_id=product_row["id"],
        subscription_type=SubscriptionType.ANNUAL,
        amount=amount,
    )
    if created_at is not None:
        subscription = replace(subscription, created_at=created_at, updated_at=created_at)
    return subscription


def save_pending_subscription(
    subscription_repository, customer, product_row, **kwargs
) -> Subscription:
    """Save a pending subscription for the customer."""
    return asyncio.run(
        subscription_repository.save(pending_subscription_for(customer, product_row, **kwargs))
    )


@pytest.fixture
def pending_subscription(subscription_repository, customer, product_row):
    """Fixture for one pending subscription."""
    return save_pending_subscription(subscription_repository, customer, product_row)


@pytest.fixture
def inactive_license(license_repository, pending_subscription, customer, product_row):
    """Fixture for an inactive license linked to the pending subscription."""
    return asyncio.run(
        license_repository.save(
            License.create(
                subscription_id=pending_subscription.id,
                key_prefix="LIC",
                customer_id=customer.id,
                product_id=product_row["id"],
                max_activations=3,
            )
        )
    )


def make_staff_identity(role: UserRole, email: Optional[str] = None) -> ResolvedIdentity:
    """Build a resolved staff identity for the given role."""
    profile = Profile.create(
        subject_id=str(uuid.uuid4()),
        email=email or f"{role.value}@backoffice.example.com",
        full_name=role.label,
        role=role,
    )
    return ResolvedIdentity(
        subject_id=profile.id, email=profile.email, kind=IdentityKind.STAFF, profile=profile
    )


@pytest.fixture
def super_admin():
    return make_staff_identity(UserRole.SUPER_ADMIN)


@pytest.fixture
def admin():
    return make_staff_identity(UserRole.ADMIN)


@pytest.fixture
def staff_member():
    return make_staff_identity(UserRole.STAFF)


@pytest.fixture
def customer_identity(customer):
    """Fixture for the resolved identity of the saved customer."""
    return ResolvedIdentity(
        subject_id=str(uuid.uuid4()),
        email=customer.email,
        kind=IdentityKind.CUSTOMER,
        customer=customer,
    )


@pytest.fixture
def failing_identity_provider():
    """Fixture for an identity provider whose account creation faults."""
    return FakeIdentityProvider(fail_create=IdentityProviderError("identity service unavailable"))


@pytest.fixture
def api_client():
    """Fixture for DRF API client."""
    from rest_framework.test import APIClient

    return APIClient()


@pytest.fixture
def make_product(store):
    """Fixture returning an async product-row factory bound to the store."""

    async def factory(**overrides):
        row = product_values()
        row.update(overrides)
        return await store.insert(Collections.PRODUCTS, row)

    return factory


@pytest.fixture
def make_pending_subscription(subscription_repository, customer, product_row):
    """Fixture returning a factory for more pending subscriptions of the customer."""

    async def factory(created_at=None, amount=Decimal("49.00")):
        return await subscription_repository.save(
            pending_subscription_for(customer, product_row, created_at=created_at, amount=amount)
        )

    return factory


@pytest.fixture
def make_account(db):
    """Fixture returning a factory for Django-backed identity accounts."""
    from asgiref.sync import async_to_sync

    from accounts.infrastructure.django_identity_provider import DjangoIdentityProvider

    def factory(email, password="secret123", **metadata):
        return async_to_sync(DjangoIdentityProvider().create_user)(email, password, metadata)

    return factory


@pytest.fixture
def staff_client(api_client, make_account):
    """Fixture returning a factory for an API client signed in as staff of a role."""
    from django.contrib.auth import get_user_model

    from accounts.infrastructure.models import Profile as ProfileModel

    def factory(role=UserRole.ADMIN, email=None):
        email = email or f"{role.value}@backoffice.example.com"
        account = make_account(email, user_type="staff", role=role.value)
        ProfileModel.objects.create(
            id=account.subject_id, email=email, full_name=role.label, role=role.value
        )
        api_client.force_login(get_user_model().objects.get(pk=account.subject_id))
        return api_client

    return factory
