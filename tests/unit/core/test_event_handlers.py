"""
Unit tests for the event bus and its built-in handlers.
"""
import logging
import uuid
from decimal import Decimal

import pytest

from core import metrics
from core.infrastructure.event_handlers import (
    ALL_EVENT_TYPES,
    AuditLogEventHandler,
    MetricsEventHandler,
    register_event_handlers,
)
from licenses.domain.events import LicenseRevoked
from sales.domain.events import SaleRecorded


class ExplodingHandler:
    async def handle(self, event):
        raise RuntimeError("handler broke")


class RecordingHandler:
    def __init__(self):
        self.events = []

    async def handle(self, event):
        self.events.append(event)


def _revoked():
    return LicenseRevoked(license_id=uuid.uuid4(), previous_status="active")


@pytest.mark.asyncio
class TestInMemoryEventBus:
    async def test_failing_handler_does_not_stop_others(self, bus):
        recorder = RecordingHandler()
        bus.subscribe(LicenseRevoked, ExplodingHandler())
        bus.subscribe(LicenseRevoked, recorder)

        await bus.publish(_revoked())

        assert len(recorder.events) == 1

    async def test_handler_subscribed_once_per_type(self, bus):
        recorder = RecordingHandler()
        bus.subscribe(LicenseRevoked, recorder)
        bus.subscribe(LicenseRevoked, RecordingHandler())

        await bus.publish(_revoked())

        assert len(recorder.events) == 1


@pytest.mark.asyncio
class TestBuiltInHandlers:
    async def test_audit_log(self, caplog):
        event = _revoked()

        with caplog.at_level(logging.INFO, logger="audit"):
            await AuditLogEventHandler().handle(event)

        assert caplog.records[0].aggregate_id == str(event.license_id)
        assert "LicenseRevoked" in caplog.records[0].getMessage()

    async def test_sale_counter(self):
        counter = metrics.sales_recorded_total.labels(currency="CHF", mode="updated")
        before = counter._value.get()

        await MetricsEventHandler().handle(
            SaleRecorded(
                sale_id=uuid.uuid4(),
                subscription_id=uuid.uuid4(),
                amount=Decimal("10"),
                currency="CHF",
                updated_existing=True,
            )
        )

        assert counter._value.get() == before + 1

    async def test_register_covers_every_event_type(self, bus):
        register_event_handlers(bus)
        register_event_handlers(bus)

        for event_type in ALL_EVENT_TYPES:
            assert len(bus._handlers[event_type]) == 2
