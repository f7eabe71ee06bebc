"""
Subscription API views.
"""

from asgiref.sync import async_to_sync
from django.conf import settings
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.authentication import require_identity
from api.v1.subscriptions.serializers import (
    CheckoutResponseSerializer,
    StartCheckoutRequestSerializer,
    SubscriptionSerializer,
)
from core.infrastructure.store import get_record_store
from core.instrumentation import Status, StatusCode, get_tracer
from customers.infrastructure.repositories.store_customer_repository import (
    StoreCustomerRepository,
)
from licenses.infrastructure.repositories.store_license_repository import StoreLicenseRepository
from products.infrastructure.repositories.store_product_repository import StoreProductRepository
from sales.infrastructure.repositories.store_sale_repository import StoreSaleRepository
from subscriptions.application.commands.start_checkout import StartCheckoutCommand
from subscriptions.application.handlers.list_trials_handler import ListTrialsHandler
from subscriptions.application.handlers.start_checkout_handler import StartCheckoutHandler
from subscriptions.application.queries.list_trials import ListTrialsQuery
from subscriptions.infrastructure.repositories.store_subscription_repository import (
    StoreSubscriptionRepository,
)

tracer = get_tracer(__name__)


class StartCheckoutView(APIView):
    """View for opening a checkout."""

    @extend_schema(
        operation_id="start_checkout",
        summary="Start Checkout",
        description=(
            "Create a pending subscription for a customer and product, together with "
            "an inactive license and a pending sale. The payment provider's success "
            "event later activates all three."
        ),
        tags=["Subscriptions"],
        request=StartCheckoutRequestSerializer,
        responses={
            201: CheckoutResponseSerializer,
            400: {"description": "Bad Request"},
            403: {"description": "Not allowed to check out for this customer"},
            404: {"description": "Customer or product not found"},
        },
    )
    def post(self, request: Request) -> Response:
        """Start a checkout."""
        return async_to_sync(self._handle_start_checkout)(request)

    async def _handle_start_checkout(self, request: Request) -> Response:
        """Async handler for start checkout."""
        with tracer.start_as_current_span("start_checkout") as span:
            identity = require_identity(request)
            serializer = StartCheckoutRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return Response({"error": serializer.errors}, status=status.HTTP_400_BAD_REQUEST)

            store = get_record_store()
            handler = StartCheckoutHandler(
                customer_repository=StoreCustomerRepository(store),
                product_repository=StoreProductRepository(store),
                subscription_repository=StoreSubscriptionRepository(store),
                license_repository=StoreLicenseRepository(store),
                sale_repository=StoreSaleRepository(store),
                license_key_prefix=settings.LICENSES["KEY_PREFIX"],
            )
            data = serializer.validated_data
            span.set_attribute("customer.id", str(data["customer_id"]))
            span.set_attribute("product.id", str(data["product_id"]))
            result = await handler.handle(
                StartCheckoutCommand(
                    customer_id=data["customer_id"],
                    product_id=data["product_id"],
                    requested_by=identity,
                    auto_renew=data["auto_renew"],
                )
            )
            span.set_attribute("subscription.id", str(result.subscription.id))
            span.set_status(Status(StatusCode.OK))
            return Response(CheckoutResponseSerializer(result).data, status=status.HTTP_201_CREATED)


class ListTrialsView(APIView):
    """View for listing trial subscriptions."""

    @extend_schema(
        operation_id="list_trials",
        summary="List Trials",
        description=(
            "List trial subscriptions. Expiry is computed when the list is read: "
            "a trial whose end date has passed is reported as expired."
        ),
        tags=["Subscriptions"],
        parameters=[
            OpenApiParameter(
                name="state",
                type=str,
                location=OpenApiParameter.QUERY,
                required=False,
                enum=["active", "expired"],
                description="Trials still running (default) or already ended",
            ),
        ],
        responses={200: SubscriptionSerializer(many=True), 403: {"description": "Staff only"}},
    )
    def get(self, request: Request) -> Response:
        """List trials."""
        return async_to_sync(self._handle_list_trials)(request)

    async def _handle_list_trials(self, request: Request) -> Response:
        with tracer.start_as_current_span("list_trials") as span:
            identity = require_identity(request)
            state = request.query_params.get("state", "active")
            if state not in ("active", "expired"):
                span.set_status(Status(StatusCode.ERROR, "Invalid state"))
                return Response(
                    {"error": "state must be 'active' or 'expired'"},
                    status=status.HTTP_400_BAD_REQUEST,
                )
            span.set_attribute("trials.state", state)

            handler = ListTrialsHandler(
                subscription_repository=StoreSubscriptionRepository(get_record_store())
            )
            trials = await handler.handle(
                ListTrialsQuery(expired=state == "expired", requested_by=identity)
            )
            span.set_status(Status(StatusCode.OK))
            return Response(SubscriptionSerializer(trials, many=True).data)
