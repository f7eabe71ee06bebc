"""
License API views.

Revocation is a staff action. Seat activation is called by the licensed
product itself and authenticates with the license key.
"""

import uuid

from asgiref.sync import async_to_sync
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.authentication import require_identity
from api.v1.licenses.serializers import ActivateSeatRequestSerializer, LicenseSerializer
from core.infrastructure.store import get_record_store
from core.instrumentation import Status, StatusCode, get_tracer
from licenses.application.commands.license_commands import ActivateSeatCommand, RevokeLicenseCommand
from licenses.application.handlers.license_handlers import ActivateSeatHandler, RevokeLicenseHandler
from licenses.infrastructure.repositories.store_license_repository import StoreLicenseRepository

tracer = get_tracer(__name__)


class RevokeLicenseView(APIView):
    """View for revoking a license."""

    @extend_schema(
        operation_id="revoke_license",
        summary="Revoke License",
        description="Revoke a license. Revocation is unconditional and cannot be undone.",
        tags=["Licenses"],
        request=None,
        responses={
            200: LicenseSerializer,
            403: {"description": "Staff only"},
            404: {"description": "License not found"},
        },
    )
    def post(self, request: Request, license_id: uuid.UUID) -> Response:
        """Revoke a license."""
        return async_to_sync(self._handle_revoke)(request, license_id)

    async def _handle_revoke(self, request: Request, license_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("revoke_license") as span:
            span.set_attribute("license.id", str(license_id))
            identity = require_identity(request)
            handler = RevokeLicenseHandler(
                license_repository=StoreLicenseRepository(get_record_store())
            )
            result = await handler.handle(
                RevokeLicenseCommand(license_id=license_id, requested_by=identity)
            )
            span.set_status(Status(StatusCode.OK))
            return Response(LicenseSerializer(result).data)


class ActivateSeatView(APIView):
    """View for consuming one activation seat of a license."""

    @extend_schema(
        operation_id="activate_seat",
        summary="Activate License Seat",
        description=(
            "Consume one seat of an active, unexpired license. Requires either the "
            "X-License-Key header or license_key in the body."
        ),
        tags=["Licenses"],
        parameters=[
            OpenApiParameter(
                name="X-License-Key",
                type=str,
                location=OpenApiParameter.HEADER,
                required=False,
                description="License key (provide either this or license_key in the body)",
            ),
        ],
        request=ActivateSeatRequestSerializer,
        responses={
            200: LicenseSerializer,
            400: {"description": "License inactive, expired, revoked or out of seats"},
            404: {"description": "License key not found"},
        },
    )
    def post(self, request: Request) -> Response:
        """Activate a seat."""
        return async_to_sync(self._handle_activate_seat)(request)

    async def _handle_activate_seat(self, request: Request) -> Response:
        with tracer.start_as_current_span("activate_seat") as span:
            serializer = ActivateSeatRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return Response({"error": serializer.errors}, status=status.HTTP_400_BAD_REQUEST)

            license_key = serializer.validated_data.get("license_key") or request.headers.get(
                "X-License-Key"
            )
            if not license_key:
                span.set_status(Status(StatusCode.ERROR, "License key required"))
                return Response(
                    {"error": "license_key or X-License-Key header required"},
                    status=status.HTTP_400_BAD_REQUEST,
                )

            handler = ActivateSeatHandler(
                license_repository=StoreLicenseRepository(get_record_store())
            )
            result = await handler.handle(ActivateSeatCommand(license_key=license_key))
            span.set_attribute("license.id", str(result.id))
            span.set_attribute("license.seats_remaining", result.seats_remaining)
            span.set_status(Status(StatusCode.OK))
            return Response(LicenseSerializer(result).data)
