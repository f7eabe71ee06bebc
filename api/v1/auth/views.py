"""
Authentication API views.

Sessions are Django sessions; the resolved identity of an authenticated
request is attached by ``IdentityMiddleware``.
"""

from asgiref.sync import async_to_sync
from django.conf import settings
from django.contrib.auth import authenticate, login, logout
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.application.commands.register_customer import RegisterCustomerCommand
from accounts.application.handlers.register_customer_handler import RegisterCustomerHandler
from accounts.application.services.identity_resolver import IdentityResolver
from accounts.domain.identity import AuthSession
from accounts.infrastructure.django_identity_provider import DjangoIdentityProvider
from accounts.infrastructure.repositories.store_profile_repository import (
    StoreProfileRepository,
)
from api.authentication import require_identity
from api.v1.auth.serializers import (
    IdentityResponseSerializer,
    LoginRequestSerializer,
    SignupRequestSerializer,
    SignupResponseSerializer,
)
from core.domain.exceptions import AuthenticationRequiredError, InvalidCredentialsError
from core.infrastructure.store import get_record_store
from core.instrumentation import Status, StatusCode, get_tracer
from customers.infrastructure.repositories.store_customer_repository import (
    StoreCustomerRepository,
)

_identity_provider = DjangoIdentityProvider()

tracer = get_tracer(__name__)


class LoginView(APIView):
    """Sign in with email and password."""

    @extend_schema(
        operation_id="login",
        summary="Sign In",
        description="Start a session and return the resolved identity of the account.",
        tags=["Auth"],
        request=LoginRequestSerializer,
        responses={
            200: IdentityResponseSerializer,
            400: {"description": "Bad Request"},
            401: {"description": "Invalid credentials"},
        },
    )
    def post(self, request: Request) -> Response:
        """Sign in."""
        with tracer.start_as_current_span("login") as span:
            serializer = LoginRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return Response({"error": serializer.errors}, status=status.HTTP_400_BAD_REQUEST)

            user = authenticate(
                request._request,
                username=serializer.validated_data["email"].strip().lower(),
                password=serializer.validated_data["password"],
            )
            if user is None:
                span.set_status(Status(StatusCode.ERROR, "Invalid credentials"))
                raise InvalidCredentialsError("Invalid email or password")

            login(request._request, user)
            session = AuthSession.for_user(_identity_provider.to_identity(user))
            identity = async_to_sync(self._resolve)(session)
            span.set_attribute("identity.kind", identity.kind.value)
            span.set_status(Status(StatusCode.OK))
            return Response(IdentityResponseSerializer(identity.to_dict()).data)

    async def _resolve(self, session: AuthSession):
        store = get_record_store()
        resolver = IdentityResolver(
            profile_repository=StoreProfileRepository(store),
            customer_repository=StoreCustomerRepository(store),
        )
        return await resolver.resolve(session)


class LogoutView(APIView):
    """End the current session."""

    @extend_schema(
        operation_id="logout",
        summary="Sign Out",
        tags=["Auth"],
        request=None,
        responses={204: None, 401: {"description": "Not signed in"}},
    )
    def post(self, request: Request) -> Response:
        """Sign out."""
        if not request.user.is_authenticated:
            raise AuthenticationRequiredError("Not signed in")
        logout(request._request)
        return Response(status=status.HTTP_204_NO_CONTENT)


class SignupView(APIView):
    """Customer self sign-up."""

    @extend_schema(
        operation_id="signup",
        summary="Customer Sign-Up",
        description=(
            "Create a customer account. An existing customer record with the same "
            "email is linked to the new account instead of being duplicated."
        ),
        tags=["Auth"],
        request=SignupRequestSerializer,
        responses={
            201: SignupResponseSerializer,
            400: {"description": "Missing fields or email already registered"},
        },
    )
    def post(self, request: Request) -> Response:
        """Register a customer."""
        return async_to_sync(self._handle_signup)(request)

    async def _handle_signup(self, request: Request) -> Response:
        """Async handler for sign-up."""
        with tracer.start_as_current_span("signup") as span:
            serializer = SignupRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return Response({"error": serializer.errors}, status=status.HTTP_400_BAD_REQUEST)

            handler = RegisterCustomerHandler(
                customer_repository=StoreCustomerRepository(get_record_store()),
                identity_provider=_identity_provider,
                min_password_length=settings.IDENTITY["MIN_PASSWORD_LENGTH"],
            )
            data = serializer.validated_data
            result = await handler.handle(
                RegisterCustomerCommand(
                    email=data["email"],
                    password=data["password"],
                    full_name=data["full_name"],
                    company=data.get("company") or None,
                    phone=data.get("phone") or None,
                )
            )
            span.set_attribute("customer.id", str(result.customer_id))
            span.set_status(Status(StatusCode.OK))
            return Response(SignupResponseSerializer(result).data, status=status.HTTP_201_CREATED)


class MeView(APIView):
    """Resolved identity of the current session."""

    @extend_schema(
        operation_id="me",
        summary="Current Identity",
        tags=["Auth"],
        responses={200: IdentityResponseSerializer, 401: {"description": "Not signed in"}},
    )
    def get(self, request: Request) -> Response:
        """Return the current identity."""
        identity = require_identity(request)
        return Response(IdentityResponseSerializer(identity.to_dict()).data)
