"""
Event handlers for domain events.

These handlers process domain events in-process for side effects
like audit logging and metrics.
"""

import logging

from accounts.domain.events import StaffMemberCreated, StaffMemberDeleted, StaffMemberUpdated
from core import metrics
from core.domain.events import DomainEvent, EventHandler
from customers.domain.events import CustomerProvisioned
from licenses.domain.events import LicenseActivated, LicenseRevoked, LicenseSeatActivated
from sales.domain.events import SaleRecorded
from subscriptions.domain.events import (
    CheckoutStarted,
    SubscriptionActivated,
    SubscriptionPaymentFailed,
)

logger = logging.getLogger(__name__)

ALL_EVENT_TYPES = (
    CheckoutStarted,
    SubscriptionActivated,
    SubscriptionPaymentFailed,
    LicenseActivated,
    LicenseSeatActivated,
    LicenseRevoked,
    SaleRecorded,
    CustomerProvisioned,
    StaffMemberCreated,
    StaffMemberUpdated,
    StaffMemberDeleted,
)


class AuditLogEventHandler(EventHandler):
    """
    Event handler for audit logging.

    Writes every domain event to the ``audit`` logger.
    """

    audit_logger = logging.getLogger("audit")

    async def handle(self, event: DomainEvent) -> None:
        """
        Handle domain event for audit logging.

        Args:
            event: Domain event to log
        """
        self.audit_logger.info(
            "Audit log: %s - %s",
            event.event_type,
            event.aggregate_id,
            extra={
                "event_id": str(event.event_id),
                "event_type": event.event_type,
                "aggregate_id": event.aggregate_id,
                "occurred_at": event.occurred_at.isoformat(),
            },
        )


class MetricsEventHandler(EventHandler):
    """Feeds the business counters in ``core.metrics``."""

    async def handle(self, event: DomainEvent) -> None:
        if isinstance(event, CheckoutStarted):
            metrics.checkouts_started_total.labels(
                subscription_type=event.subscription_type
            ).inc()
        elif isinstance(event, SubscriptionActivated):
            metrics.subscriptions_activated_total.inc()
        elif isinstance(event, SubscriptionPaymentFailed):
            metrics.subscription_payment_failures_total.inc()
        elif isinstance(event, LicenseActivated):
            metrics.licenses_activated_total.inc()
        elif isinstance(event, LicenseSeatActivated):
            metrics.license_seat_activations_total.inc()
        elif isinstance(event, LicenseRevoked):
            metrics.licenses_revoked_total.inc()
        elif isinstance(event, SaleRecorded):
            metrics.sales_recorded_total.labels(
                currency=event.currency,
                mode="updated" if event.updated_existing else "inserted",
            ).inc()
        elif isinstance(event, CustomerProvisioned):
            metrics.customers_provisioned_total.labels(source=event.source).inc()
        elif isinstance(event, StaffMemberCreated):
            metrics.staff_members_created_total.labels(role=event.role).inc()


def register_event_handlers(bus=None):
    """Register all event handlers with the event bus."""
    if bus is None:
        from core.infrastructure.events import event_bus as bus

    audit_handler = AuditLogEventHandler()
    metrics_handler = MetricsEventHandler()

    for event_type in ALL_EVENT_TYPES:
        bus.subscribe(event_type, audit_handler)
        bus.subscribe(event_type, metrics_handler)

    logger.info("Event handlers registered")
