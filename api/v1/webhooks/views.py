"""
Payment provider webhook views.

The provider is acknowledged with ``{"received": true}`` whenever the
event parsed, including business misses such as an unknown customer, so
that it does not retry conditions that are not transient. Malformed
bodies get 400; unexpected faults get 500 and are retried by the
provider.
"""

import json
import logging

from asgiref.sync import async_to_sync
from django.conf import settings
from django.http import HttpRequest, JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from core.domain.exceptions import InvalidPaymentEventError, InvalidSignatureError
from core.infrastructure.store import get_record_store
from core.instrumentation import Status, StatusCode, get_tracer
from core.metrics import errors_total, payment_events_total
from customers.infrastructure.repositories.store_customer_repository import (
    StoreCustomerRepository,
)
from licenses.infrastructure.repositories.store_license_repository import StoreLicenseRepository
from payments.application.handlers.reconcile_payment_handler import ReconcilePaymentHandler
from payments.domain.payment_event import parse_payment_event
from payments.infrastructure.repositories.store_processed_event_repository import (
    StoreProcessedEventRepository,
)
from payments.infrastructure.signatures import verify_signature
from sales.infrastructure.repositories.store_sale_repository import StoreSaleRepository
from subscriptions.infrastructure.repositories.store_subscription_repository import (
    StoreSubscriptionRepository,
)

logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)


def _build_handler() -> ReconcilePaymentHandler:
    store = get_record_store()
    config = settings.PAYMENT_EVENTS
    return ReconcilePaymentHandler(
        customer_repository=StoreCustomerRepository(store),
        subscription_repository=StoreSubscriptionRepository(store),
        license_repository=StoreLicenseRepository(store),
        sale_repository=StoreSaleRepository(store),
        processed_event_repository=StoreProcessedEventRepository(store),
        deduplicate=config.get("DEDUPLICATE", False),
        default_currency=config.get("DEFAULT_CURRENCY", "EUR"),
    )


@method_decorator(csrf_exempt, name="dispatch")
class PaymentWebhookView(View):
    """Inbound payment provider events."""

    def get(self, request: HttpRequest) -> JsonResponse:
        """Liveness probe for the provider dashboard."""
        return JsonResponse({"status": "ok", "message": "Payment webhook endpoint is active"})

    def post(self, request: HttpRequest) -> JsonResponse:
        """Reconcile one provider event."""
        with tracer.start_as_current_span("payment_webhook") as span:
            secret = settings.PAYMENT_EVENTS.get("WEBHOOK_SECRET")
            if secret:
                try:
                    verify_signature(
                        request.body,
                        request.headers.get("Stripe-Signature"),
                        secret,
                        tolerance=settings.PAYMENT_EVENTS.get("SIGNATURE_TOLERANCE_SECONDS", 300),
                    )
                except InvalidSignatureError as exc:
                    logger.warning("Webhook signature rejected: %s", exc.message)
                    span.set_status(Status(StatusCode.ERROR, "Invalid signature"))
                    payment_events_total.labels(event_type="unknown", outcome="invalid").inc()
                    return JsonResponse({"error": exc.message}, status=400)

            try:
                payload = json.loads(request.body)
            except (ValueError, UnicodeDecodeError):
                span.set_status(Status(StatusCode.ERROR, "Invalid JSON"))
                payment_events_total.labels(event_type="unknown", outcome="invalid").inc()
                return JsonResponse({"error": "Invalid JSON"}, status=400)

            try:
                event = parse_payment_event(payload)
            except InvalidPaymentEventError as exc:
                logger.warning("Rejected payment event: %s", exc.message)
                span.set_status(Status(StatusCode.ERROR, exc.message))
                payment_events_total.labels(event_type="unknown", outcome="invalid").inc()
                return JsonResponse({"error": exc.message}, status=400)

            span.set_attribute("payment.event_type", event.event_type)
            if event.event_id:
                span.set_attribute("payment.event_id", event.event_id)

            try:
                result = async_to_sync(_build_handler().handle)(event)
            except Exception as exc:  # pylint: disable=broad-exception-caught
                logger.error(
                    "Payment webhook failed",
                    extra={"event_type": event.event_type, "event_id": event.event_id},
                    exc_info=True,
                )
                span.record_exception(exc)
                span.set_status(Status(StatusCode.ERROR, "Webhook processing failed"))
                payment_events_total.labels(event_type=event.event_type, outcome="error").inc()
                errors_total.labels(
                    error_type=type(exc).__name__, endpoint="/api/v1/webhooks/payments"
                ).inc()
                return JsonResponse({"error": "Webhook processing failed"}, status=500)

            span.set_attribute("payment.outcome", result.outcome.value)
            span.set_status(Status(StatusCode.OK))
            payment_events_total.labels(
                event_type=event.event_type, outcome=result.outcome.value
            ).inc()
            logger.info(
                "Payment event reconciled",
                extra={
                    "event_type": event.event_type,
                    "outcome": result.outcome.value,
                    "subscription_id": str(result.subscription_id)
                    if result.subscription_id
                    else None,
                },
            )
            return JsonResponse({"received": True})
