"""
Identity resolution middleware.

Resolves the authenticated Django user of each request to a staff,
customer or anonymous identity and exposes it as ``request.identity``.
Must run after ``AuthenticationMiddleware``.
"""

import logging

from asgiref.sync import async_to_sync
from django.http import HttpRequest
from django.utils.deprecation import MiddlewareMixin

from accounts.application.services.identity_resolver import IdentityResolver
from accounts.domain.identity import AuthSession
from accounts.infrastructure.django_identity_provider import DjangoIdentityProvider
from accounts.infrastructure.repositories.store_profile_repository import (
    StoreProfileRepository,
)
from core.infrastructure.store import get_record_store
from customers.infrastructure.repositories.store_customer_repository import (
    StoreCustomerRepository,
)

logger = logging.getLogger(__name__)


class IdentityMiddleware(MiddlewareMixin):
    """
    Middleware attaching the resolved identity to the request.

    Anonymous requests get ``request.identity = None``. Store faults
    during resolution propagate to the caller.
    """

    identity_provider = DjangoIdentityProvider()

    def process_request(self, request: HttpRequest) -> None:
        """
        Resolve the request's identity.

        Args:
            request: HTTP request
        """
        request.identity = None  # type: ignore
        user = getattr(request, "user", None)
        if user is None or not user.is_authenticated:
            return None

        session = AuthSession.for_user(self.identity_provider.to_identity(user))
        request.identity = async_to_sync(self._resolve)(session)  # type: ignore
        logger.debug(
            "Identity resolved",
            extra={"subject_id": session.subject_id, "kind": request.identity.kind.value},
        )
        return None

    async def _resolve(self, session: AuthSession):
        store = get_record_store()
        resolver = IdentityResolver(
            profile_repository=StoreProfileRepository(store),
            customer_repository=StoreCustomerRepository(store),
        )
        return await resolver.resolve(session)
