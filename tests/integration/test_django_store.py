"""
Integration tests for the Django-backed record store.
"""
import uuid
from datetime import timedelta
from decimal import Decimal

import pytest
from asgiref.sync import async_to_sync
from django.utils import timezone

from core.domain.exceptions import DuplicateRecordError, StoreError, UnknownProcedureError
from core.infrastructure.store import get_record_store
from core.ports.record_store import Collections, Ordering, eq, ilike, lt
from customers.domain.customer import Customer
from customers.infrastructure.repositories.store_customer_repository import (
    StoreCustomerRepository,
)
from products.infrastructure.models import Product
from subscriptions.infrastructure.repositories.store_subscription_repository import (
    StoreSubscriptionRepository,
)


def run(coroutine_function, *args, **kwargs):
    return async_to_sync(coroutine_function)(*args, **kwargs)


@pytest.fixture
def store():
    return get_record_store()


@pytest.fixture
def product():
    return Product.objects.create(
        sku=f"PRO-{uuid.uuid4().hex[:6]}", name="Backup Suite", price=Decimal("29.00")
    )


@pytest.mark.django_db
@pytest.mark.integration
class TestDjangoRecordStore:
    """Integration tests for DjangoRecordStore."""

    def test_customer_round_trip(self, store):
        repository = StoreCustomerRepository(store)
        saved = run(repository.save, Customer.create(email="Ada@Example.com", full_name="Ada"))

        found = run(repository.find_by_email, "ADA@example.com")

        assert found.id == saved.id
        assert found.full_name == "Ada"

    def test_unique_violation(self, store):
        run(store.insert, Collections.CUSTOMERS, {"email": "a@example.com", "full_name": "A"})

        with pytest.raises(DuplicateRecordError):
            run(store.insert, Collections.CUSTOMERS, {"email": "a@example.com", "full_name": "B"})

    def test_unknown_column(self, store):
        with pytest.raises(StoreError):
            run(store.select, Collections.CUSTOMERS, [eq("nickname", "ada")])

    def test_select_ordering_limit_and_comparisons(self, store, product):
        customer = run(
            store.insert, Collections.CUSTOMERS, {"email": "b@example.com", "full_name": "B"}
        )
        now = timezone.now()
        for hours in (3, 2, 1):
            run(
                store.insert,
                Collections.SUBSCRIPTIONS,
                {
                    "customer_id": customer["id"],
                    "product_id": product.id,
                    "subscription_type": "monthly",
                    "created_at": now - timedelta(hours=hours),
                },
            )

        newest = run(
            store.select,
            Collections.SUBSCRIPTIONS,
            [eq("customer_id", customer["id"])],
            order_by=[Ordering("created_at", descending=True)],
            limit=1,
        )
        older = run(
            store.select,
            Collections.SUBSCRIPTIONS,
            [lt("created_at", now - timedelta(minutes=90))],
        )

        assert newest[0]["created_at"] == now - timedelta(hours=1)
        assert len(older) == 2

    def test_ilike(self, store):
        run(store.insert, Collections.CUSTOMERS, {"email": "grace@navy.mil", "full_name": "G"})

        assert len(run(store.select, Collections.CUSTOMERS, [ilike("email", "%NAVY%")])) == 1

    def test_bulk_update_returns_rows(self, store, product):
        customer = run(
            store.insert, Collections.CUSTOMERS, {"email": "c@example.com", "full_name": "C"}
        )
        repository = StoreSubscriptionRepository(store)
        for _ in range(2):
            run(
                store.insert,
                Collections.SUBSCRIPTIONS,
                {
                    "customer_id": customer["id"],
                    "product_id": product.id,
                    "subscription_type": "annual",
                },
            )

        failed = run(repository.mark_pending_payment_failed, customer["id"])

        assert len(failed) == 2
        assert all(subscription.payment_status.value == "failed" for subscription in failed)

    def test_process_payment_procedure(self, store, product):
        result = run(
            store.call,
            "process_payment",
            {
                "customer_email": "new@example.com",
                "customer_name": None,
                "product_sku": product.sku,
                "payment_reference": "pi_9",
            },
        )

        (sale,) = run(store.select, Collections.SALES, [eq("id", result["sale_id"])])
        (license,) = run(store.select, Collections.LICENSES, [eq("id", result["license_id"])])
        (customer,) = run(store.select, Collections.CUSTOMERS, [eq("id", result["customer_id"])])
        assert sale["payment_status"] == "paid"
        assert sale["amount"] == Decimal("29.00")
        assert license["status"] == "active"
        assert license["current_activations"] == 1
        assert customer["full_name"] == "new"

    def test_unknown_procedure(self, store):
        with pytest.raises(UnknownProcedureError):
            run(store.call, "refund_payment", {})
