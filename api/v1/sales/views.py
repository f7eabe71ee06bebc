"""
Sales API views.
"""

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.authentication import require_identity
from api.v1.sales.serializers import ProcessPaymentRequestSerializer, ProcessedPaymentSerializer
from core.infrastructure.store import get_record_store
from core.instrumentation import Status, StatusCode, get_tracer
from sales.application.commands.process_payment import ProcessPaymentCommand
from sales.application.handlers.process_payment_handler import ProcessPaymentHandler

tracer = get_tracer(__name__)


class ProcessPaymentView(APIView):
    """View for recording a completed payment in one step."""

    @extend_schema(
        operation_id="process_payment",
        summary="Process Payment",
        description=(
            "Record a payment taken outside the checkout flow: find or create the "
            "customer, then create an active paid subscription, an active license "
            "and a paid sale as one unit."
        ),
        tags=["Sales"],
        request=ProcessPaymentRequestSerializer,
        responses={
            201: ProcessedPaymentSerializer,
            400: {"description": "Bad Request"},
            403: {"description": "Admins only"},
            404: {"description": "Product not found"},
        },
    )
    def post(self, request: Request) -> Response:
        """Process a payment."""
        return async_to_sync(self._handle_process_payment)(request)

    async def _handle_process_payment(self, request: Request) -> Response:
        """Async handler for process payment."""
        with tracer.start_as_current_span("process_payment") as span:
            identity = require_identity(request)
            serializer = ProcessPaymentRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return Response({"error": serializer.errors}, status=status.HTTP_400_BAD_REQUEST)

            data = serializer.validated_data
            span.set_attribute("product.sku", data["product_sku"])
            handler = ProcessPaymentHandler(store=get_record_store())
            result = await handler.handle(
                ProcessPaymentCommand(
                    customer_email=data["customer_email"],
                    product_sku=data["product_sku"],
                    customer_name=data.get("customer_name") or None,
                    payment_reference=data.get("payment_reference") or None,
                    requested_by=identity,
                )
            )
            span.set_attribute("subscription.id", str(result.subscription_id))
            span.set_status(Status(StatusCode.OK))
            return Response(ProcessedPaymentSerializer(result).data, status=status.HTTP_201_CREATED)
