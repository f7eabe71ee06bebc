"""
Django implementation of the IdentityProvider port.

Accounts are ``django.contrib.auth`` users keyed by email (the username
is the lower-cased email). Password hashing is left to Django's
configured hashers; per-account metadata lives in ``UserMetadata``.
"""
import logging
from typing import Any, Dict, Optional

from asgiref.sync import sync_to_async
from django.contrib.auth import authenticate, get_user_model
from django.db import DatabaseError, IntegrityError, transaction

from accounts.domain.identity import IdentityUser
from accounts.infrastructure.models import UserMetadata
from accounts.ports.identity_provider import IdentityProvider
from core.domain.exceptions import IdentityProviderError, UserAlreadyExistsError

logger = logging.getLogger(__name__)


class DjangoIdentityProvider(IdentityProvider):
    """
    Django auth implementation of IdentityProvider.

    This adapter:
    1. Creates and looks up ``auth.User`` accounts
    2. Stores account metadata next to the user
    3. Checks credentials through the configured auth backends
    """

    def to_identity(self, user) -> IdentityUser:
        """
        Convert a Django user into an IdentityUser.

        Args:
            user: ``auth.User`` instance

        Returns:
            IdentityUser with the account's metadata
        """
        metadata = (
            UserMetadata.objects.filter(user_id=str(user.pk))
            .values_list("data", flat=True)
            .first()
        )
        return IdentityUser(subject_id=str(user.pk), email=user.email or None, metadata=metadata or {})

    @sync_to_async
    def create_user(
        self,
        email: str,
        password: str,
        metadata: Dict[str, Any],
        email_confirm: bool = True,
    ) -> IdentityUser:
        user_model = get_user_model()
        address = email.strip().lower()
        if user_model.objects.filter(email__iexact=address).exists():
            raise UserAlreadyExistsError(f"An account already exists for {address}")

        try:
            with transaction.atomic():
                user = user_model.objects.create_user(
                    username=address, email=address, password=password
                )
                UserMetadata.objects.create(
                    user_id=str(user.pk),
                    data={**metadata, "email_confirmed": email_confirm},
                )
        except IntegrityError as exc:
            raise UserAlreadyExistsError(f"An account already exists for {address}") from exc
        except DatabaseError as exc:
            logger.error("Identity account creation failed", extra={"email": address}, exc_info=True)
            raise IdentityProviderError(str(exc)) from exc

        logger.info("Identity account created", extra={"subject_id": str(user.pk)})
        return self.to_identity(user)

    @sync_to_async
    def find_user_by_email(self, email: str) -> Optional[IdentityUser]:
        user = get_user_model().objects.filter(email__iexact=email.strip()).first()
        return self.to_identity(user) if user else None

    @sync_to_async
    def get_user(self, subject_id: str) -> Optional[IdentityUser]:
        try:
            user = get_user_model().objects.filter(pk=subject_id).first()
        except (TypeError, ValueError):
            return None
        return self.to_identity(user) if user else None

    @sync_to_async
    def authenticate(self, email: str, password: str) -> Optional[IdentityUser]:
        user = authenticate(username=email.strip().lower(), password=password)
        return self.to_identity(user) if user else None
