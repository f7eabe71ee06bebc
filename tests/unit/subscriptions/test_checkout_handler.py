"""
Unit tests for StartCheckoutHandler.
"""
import uuid

import pytest

from core.domain.exceptions import (
    CustomerNotFoundError,
    PermissionDeniedError,
    ProductNotFoundError,
    ValidationError,
)
from core.domain.value_objects import LicenseStatus, PaymentStatus
from core.ports.record_store import Collections
from subscriptions.application.commands.start_checkout import StartCheckoutCommand
from subscriptions.application.handlers.start_checkout_handler import StartCheckoutHandler
from subscriptions.domain.events import CheckoutStarted


class RecordingHandler:
    def __init__(self):
        self.events = []

    async def handle(self, event):
        self.events.append(event)


@pytest.fixture
def handler(
    customer_repository,
    product_repository,
    subscription_repository,
    license_repository,
    sale_repository,
    bus,
):
    return StartCheckoutHandler(
        customer_repository,
        product_repository,
        subscription_repository,
        license_repository,
        sale_repository,
        license_key_prefix="BKP",
        event_bus=bus,
    )


@pytest.mark.asyncio
class TestStartCheckoutHandler:
    """Tests for StartCheckoutHandler."""

    async def test_creates_pending_records(self, handler, store, customer, product_row, bus, admin):
        recorder = RecordingHandler()
        bus.subscribe(CheckoutStarted, recorder)

        result = await handler.handle(
            StartCheckoutCommand(
                customer_id=customer.id, product_id=product_row["id"], requested_by=admin
            )
        )

        assert result.subscription.status == "pending"
        assert result.subscription.amount == product_row["price"]
        assert result.license_key.startswith("BKP-")

        license_row = store.rows(Collections.LICENSES)[0]
        assert license_row["status"] == LicenseStatus.INACTIVE.value
        assert license_row["max_activations"] == 3
        assert license_row["current_activations"] == 0

        sale_row = store.rows(Collections.SALES)[0]
        assert sale_row["payment_status"] == PaymentStatus.PENDING.value
        assert sale_row["subscription_id"] == result.subscription.id
        assert recorder.events[0].license_id == result.license_id

    async def test_customer_buys_for_self(self, handler, customer, product_row, customer_identity):
        result = await handler.handle(
            StartCheckoutCommand(
                customer_id=customer.id,
                product_id=product_row["id"],
                requested_by=customer_identity,
            )
        )

        assert result.subscription.customer_id == customer.id

    async def test_customer_cannot_buy_for_others(
        self, handler, store, product_row, customer_identity
    ):
        with pytest.raises(PermissionDeniedError):
            await handler.handle(
                StartCheckoutCommand(
                    customer_id=uuid.uuid4(),
                    product_id=product_row["id"],
                    requested_by=customer_identity,
                )
            )
        assert store.rows(Collections.SUBSCRIPTIONS) == []

    async def test_unknown_customer(self, handler, product_row):
        with pytest.raises(CustomerNotFoundError):
            await handler.handle(
                StartCheckoutCommand(customer_id=uuid.uuid4(), product_id=product_row["id"])
            )

    async def test_unknown_product(self, handler, customer):
        with pytest.raises(ProductNotFoundError):
            await handler.handle(
                StartCheckoutCommand(customer_id=customer.id, product_id=uuid.uuid4())
            )

    async def test_inactive_product(self, handler, make_product, customer):
        retired = await make_product(is_active=False)

        with pytest.raises(ValidationError, match="not available"):
            await handler.handle(
                StartCheckoutCommand(customer_id=customer.id, product_id=retired["id"])
            )
