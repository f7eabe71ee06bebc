"""
Staff management API views.

Every endpoint requires a signed-in staff identity; which staff member
may act on which role is decided by the handlers.
"""

from asgiref.sync import async_to_sync
from django.conf import settings
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.application.commands.staff_commands import (
    CreateStaffCommand,
    DeleteStaffCommand,
    UpdateStaffCommand,
)
from accounts.application.handlers.staff_handlers import (
    CreateStaffHandler,
    DeleteStaffHandler,
    ListStaffHandler,
    UpdateStaffHandler,
)
from accounts.application.queries.list_staff import ListStaffQuery
from accounts.infrastructure.django_identity_provider import DjangoIdentityProvider
from accounts.infrastructure.repositories.store_profile_repository import (
    StoreProfileRepository,
)
from api.authentication import require_identity
from api.v1.staff.serializers import (
    CreateStaffRequestSerializer,
    CreateStaffResponseSerializer,
    ProfileSerializer,
    StaffListResponseSerializer,
    UpdateStaffRequestSerializer,
)
from core.infrastructure.store import get_record_store
from core.instrumentation import Status, StatusCode, get_tracer

_identity_provider = DjangoIdentityProvider()

tracer = get_tracer(__name__)


def _profile_repository() -> StoreProfileRepository:
    return StoreProfileRepository(get_record_store())


class StaffCollectionView(APIView):
    """List and provision staff members."""

    @extend_schema(
        operation_id="list_staff",
        summary="List Staff",
        description="List staff profiles and the roles the caller may create.",
        tags=["Staff"],
        responses={
            200: StaffListResponseSerializer,
            401: {"description": "Not signed in"},
            403: {"description": "Staff only"},
        },
    )
    def get(self, request: Request) -> Response:
        """List staff."""
        return async_to_sync(self._handle_list)(request)

    async def _handle_list(self, request: Request) -> Response:
        with tracer.start_as_current_span("list_staff") as span:
            identity = require_identity(request)
            handler = ListStaffHandler(profile_repository=_profile_repository())
            result = await handler.handle(ListStaffQuery(requested_by=identity))
            span.set_attribute("staff.count", len(result.staff))
            span.set_status(Status(StatusCode.OK))
            return Response(StaffListResponseSerializer(result).data)

    @extend_schema(
        operation_id="create_staff",
        summary="Create Staff Member",
        description=(
            "Create an identity account and its staff profile. When the account is "
            "created but the profile write fails, the response is still 200 and "
            "carries a warning."
        ),
        tags=["Staff"],
        request=CreateStaffRequestSerializer,
        responses={
            200: CreateStaffResponseSerializer,
            400: {"description": "Missing fields, short password or email already registered"},
            401: {"description": "Not signed in"},
            403: {"description": "Role not creatable by the caller"},
        },
    )
    def post(self, request: Request) -> Response:
        """Provision a staff member."""
        return async_to_sync(self._handle_create)(request)

    async def _handle_create(self, request: Request) -> Response:
        """Async handler for create staff."""
        with tracer.start_as_current_span("create_staff") as span:
            identity = require_identity(request)
            serializer = CreateStaffRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return Response({"error": serializer.errors}, status=status.HTTP_400_BAD_REQUEST)

            data = serializer.validated_data
            handler = CreateStaffHandler(
                profile_repository=_profile_repository(),
                identity_provider=_identity_provider,
                min_password_length=settings.IDENTITY["MIN_PASSWORD_LENGTH"],
            )
            result = await handler.handle(
                CreateStaffCommand(
                    email=data["email"],
                    password=data["password"],
                    full_name=data["full_name"],
                    phone=data.get("phone") or None,
                    role=data.get("role") or None,
                    requested_by=identity,
                )
            )
            span.set_attribute("staff.user_id", result.user_id)
            if result.warning:
                span.set_attribute("staff.warning", result.warning)
            span.set_status(Status(StatusCode.OK))
            return Response(CreateStaffResponseSerializer(result).data, status=status.HTTP_200_OK)


class StaffMemberView(APIView):
    """Edit or delete one staff member."""

    @extend_schema(
        operation_id="update_staff",
        summary="Update Staff Member",
        tags=["Staff"],
        request=UpdateStaffRequestSerializer,
        responses={
            200: ProfileSerializer,
            403: {"description": "Not allowed to edit this role"},
            404: {"description": "Profile not found"},
        },
    )
    def patch(self, request: Request, profile_id: str) -> Response:
        """Update a staff profile."""
        return async_to_sync(self._handle_update)(request, profile_id)

    async def _handle_update(self, request: Request, profile_id: str) -> Response:
        with tracer.start_as_current_span("update_staff") as span:
            span.set_attribute("staff.profile_id", profile_id)
            identity = require_identity(request)
            serializer = UpdateStaffRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return Response({"error": serializer.errors}, status=status.HTTP_400_BAD_REQUEST)

            data = serializer.validated_data
            handler = UpdateStaffHandler(profile_repository=_profile_repository())
            result = await handler.handle(
                UpdateStaffCommand(
                    profile_id=profile_id,
                    requested_by=identity,
                    full_name=data.get("full_name"),
                    phone=data.get("phone"),
                    role=data.get("role"),
                    is_active=data.get("is_active"),
                )
            )
            span.set_status(Status(StatusCode.OK))
            return Response(ProfileSerializer(result).data)

    @extend_schema(
        operation_id="delete_staff",
        summary="Delete Staff Member",
        description="Delete a staff profile. The identity account is kept.",
        tags=["Staff"],
        responses={
            204: None,
            403: {"description": "Not allowed to delete this role"},
            404: {"description": "Profile not found"},
        },
    )
    def delete(self, request: Request, profile_id: str) -> Response:
        """Delete a staff profile."""
        return async_to_sync(self._handle_delete)(request, profile_id)

    async def _handle_delete(self, request: Request, profile_id: str) -> Response:
        with tracer.start_as_current_span("delete_staff") as span:
            span.set_attribute("staff.profile_id", profile_id)
            identity = require_identity(request)
            handler = DeleteStaffHandler(profile_repository=_profile_repository())
            await handler.handle(DeleteStaffCommand(profile_id=profile_id, requested_by=identity))
            span.set_status(Status(StatusCode.OK))
            return Response(status=status.HTTP_204_NO_CONTENT)
