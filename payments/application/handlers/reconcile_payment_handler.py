"""
ReconcilePaymentHandler.

Applies a parsed payment event to subscription, license and sale state.

The run is a sequence of independent store writes with no transaction
around them. Two concurrent success deliveries for the same customer can
both see the subscription pending and both settle it; the pending-sale
lookup only prevents a duplicate sale when the deliveries are serialized.
The optional processed-event ledger closes that gap for events that carry
an id.
"""
import logging
from decimal import Decimal
from typing import List, Optional

from core.domain.events import EventBus
from core.domain.exceptions import DomainException
from core.infrastructure.events import event_bus as default_event_bus
from customers.ports.customer_repository import CustomerRepository
from licenses.domain.events import LicenseActivated
from licenses.ports.license_repository import LicenseRepository
from payments.domain.payment_event import (
    PaymentEvent,
    PaymentFailed,
    PaymentSucceeded,
)
from payments.domain.reconciliation import ReconciliationOutcome, ReconciliationResult
from payments.ports.processed_event_repository import ProcessedEventRepository
from sales.domain.events import SaleRecorded
from sales.domain.sale import Sale
from sales.ports.sale_repository import SaleRepository
from subscriptions.domain.events import SubscriptionActivated, SubscriptionPaymentFailed
from subscriptions.domain.subscription import Subscription
from subscriptions.ports.subscription_repository import SubscriptionRepository

logger = logging.getLogger(__name__)

PAYMENT_METHOD = "stripe"


class ReconcilePaymentHandler:
    """Handler for parsed payment provider events."""

    def __init__(
        self,
        customer_repository: CustomerRepository,
        subscription_repository: SubscriptionRepository,
        license_repository: LicenseRepository,
        sale_repository: SaleRepository,
        processed_event_repository: Optional[ProcessedEventRepository] = None,
        deduplicate: bool = False,
        default_currency: str = "EUR",
        event_bus: Optional[EventBus] = None,
    ):
        """Initialize handler with repositories."""
        self.customer_repository = customer_repository
        self.subscription_repository = subscription_repository
        self.license_repository = license_repository
        self.sale_repository = sale_repository
        self.processed_event_repository = processed_event_repository
        self.deduplicate = deduplicate and processed_event_repository is not None
        self.default_currency = default_currency
        self.event_bus = event_bus or default_event_bus

    async def handle(self, event: PaymentEvent) -> ReconciliationResult:
        """
        Reconcile one payment event.

        Args:
            event: Parsed payment event

        Returns:
            ReconciliationResult describing what was done

        Raises:
            StoreError: If the store faults before the subscription is settled
        """
        if not isinstance(event, (PaymentSucceeded, PaymentFailed)):
            logger.info("Unhandled payment event type", extra={"event_type": event.event_type})
            return ReconciliationResult(event.event_type, ReconciliationOutcome.IGNORED)

        claimed = False
        if self.deduplicate and event.event_id:
            if not await self.processed_event_repository.claim(event.event_id, event.event_type):
                logger.info(
                    "Payment event already processed",
                    extra={"event_id": event.event_id, "event_type": event.event_type},
                )
                return ReconciliationResult(event.event_type, ReconciliationOutcome.DUPLICATE_EVENT)
            claimed = True

        try:
            if isinstance(event, PaymentSucceeded):
                return await self._handle_success(event)
            return await self._handle_failure(event)
        except Exception:
            # Let the provider's redelivery run the event again.
            if claimed:
                await self.processed_event_repository.release(event.event_id)
            raise

    async def _handle_success(self, event: PaymentSucceeded) -> ReconciliationResult:
        if not event.customer_email:
            logger.warning("No customer email in payment event", extra={"event_type": event.event_type})
            return ReconciliationResult(event.event_type, ReconciliationOutcome.MISSING_EMAIL)

        customer = await self.customer_repository.find_by_email(event.customer_email)
        if customer is None:
            logger.warning(
                "Customer not found for payment",
                extra={"email": event.customer_email, "event_type": event.event_type},
            )
            return ReconciliationResult(event.event_type, ReconciliationOutcome.CUSTOMER_NOT_FOUND)

        # Newest pending wins; amount and product are not correlated.
        subscription = await self.subscription_repository.find_latest_pending_for_customer(customer.id)
        if subscription is None:
            logger.warning(
                "No pending subscription for customer",
                extra={"customer_id": str(customer.id), "event_type": event.event_type},
            )
            return ReconciliationResult(
                event.event_type,
                ReconciliationOutcome.NO_PENDING_SUBSCRIPTION,
                customer_id=customer.id,
            )

        subscription = await self.subscription_repository.save(subscription.confirm_payment())
        logger.info(
            "Subscription activated",
            extra={"subscription_id": str(subscription.id), "customer_id": str(customer.id)},
        )
        await self.event_bus.publish(
            SubscriptionActivated(subscription_id=subscription.id, customer_id=customer.id)
        )

        warnings: List[str] = []
        license_id = await self._activate_license(subscription, warnings)
        sale_id = await self._record_sale(subscription, event, warnings)

        return ReconciliationResult(
            event.event_type,
            ReconciliationOutcome.SUBSCRIPTION_ACTIVATED,
            customer_id=customer.id,
            subscription_id=subscription.id,
            license_id=license_id,
            sale_id=sale_id,
            warnings=warnings,
        )

    async def _activate_license(self, subscription: Subscription, warnings: List[str]):
        try:
            license = await self.license_repository.find_inactive_for_subscription(subscription.id)
            if license is None:
                logger.info(
                    "No inactive license for subscription",
                    extra={"subscription_id": str(subscription.id)},
                )
                return None
            license = await self.license_repository.save(license.activate_for_subscription())
        except DomainException as exc:
            logger.error(
                "License activation failed",
                extra={"subscription_id": str(subscription.id), "error": str(exc)},
            )
            warnings.append(f"License activation failed: {exc.message}")
            return None

        await self.event_bus.publish(
            LicenseActivated(license_id=license.id, subscription_id=subscription.id)
        )
        return license.id

    def _realized_amount(self, subscription: Subscription, event: PaymentSucceeded) -> Decimal:
        if event.amount_received:
            return Decimal(event.amount_received) / 100
        return subscription.amount or Decimal("0")

    async def _record_sale(
        self, subscription: Subscription, event: PaymentSucceeded, warnings: List[str]
    ):
        amount = self._realized_amount(subscription, event)
        kind = subscription.subscription_type.value
        try:
            pending = await self.sale_repository.find_pending_for_subscription(subscription.id)
            if pending is not None:
                sale = await self.sale_repository.save(
                    pending.mark_paid(
                        amount,
                        notes=f"Stripe payment confirmed - {kind}",
                        payment_method=PAYMENT_METHOD,
                        payment_reference=event.payment_reference,
                    )
                )
                updated_existing = True
            else:
                sale = await self.sale_repository.save(
                    Sale.create_paid(
                        subscription_id=subscription.id,
                        amount=amount,
                        currency=(event.currency or self.default_currency).upper(),
                        customer_id=subscription.customer_id,
                        product_id=subscription.product_id,
                        payment_method=PAYMENT_METHOD,
                        payment_reference=event.payment_reference,
                        notes=f"Stripe payment - {kind}",
                    )
                )
                updated_existing = False
        except DomainException as exc:
            logger.error(
                "Sale could not be recorded",
                extra={"subscription_id": str(subscription.id), "error": str(exc)},
            )
            warnings.append(f"Sale could not be recorded: {exc.message}")
            return None

        logger.info(
            "Sale recorded",
            extra={
                "sale_id": str(sale.id),
                "subscription_id": str(subscription.id),
                "amount": str(sale.amount),
                "updated_existing": updated_existing,
            },
        )
        await self.event_bus.publish(
            SaleRecorded(
                sale_id=sale.id,
                subscription_id=subscription.id,
                amount=sale.amount,
                currency=sale.currency,
                updated_existing=updated_existing,
            )
        )
        return sale.id

    async def _handle_failure(self, event: PaymentFailed) -> ReconciliationResult:
        if not event.customer_email:
            logger.warning("No customer email in payment event", extra={"event_type": event.event_type})
            return ReconciliationResult(event.event_type, ReconciliationOutcome.MISSING_EMAIL)

        customer = await self.customer_repository.find_by_email(event.customer_email)
        if customer is None:
            logger.warning(
                "Customer not found for failed payment",
                extra={"email": event.customer_email, "event_type": event.event_type},
            )
            return ReconciliationResult(event.event_type, ReconciliationOutcome.CUSTOMER_NOT_FOUND)

        failed = await self.subscription_repository.mark_pending_payment_failed(customer.id)
        logger.info(
            "Payment failure recorded",
            extra={"customer_id": str(customer.id), "subscriptions": len(failed)},
        )
        for subscription in failed:
            await self.event_bus.publish(
                SubscriptionPaymentFailed(subscription_id=subscription.id, customer_id=customer.id)
            )
        return ReconciliationResult(
            event.event_type,
            ReconciliationOutcome.PAYMENT_FAILURE_RECORDED,
            customer_id=customer.id,
            failed_subscription_ids=[subscription.id for subscription in failed],
        )
