"""
Identity resolution.

Maps an authenticated session to exactly one of staff, customer or
none. A session with neither a profile nor a customer record gets a
customer record created on the fly, best effort.
"""
import logging
from dataclasses import replace
from typing import Optional

from accounts.domain.identity import AuthSession, CustomerProvisioning, ResolvedIdentity
from accounts.ports.profile_repository import ProfileRepository
from core.domain.events import EventBus
from core.domain.exceptions import DomainException, DuplicateRecordError, StoreError
from core.domain.value_objects import IdentityKind
from core.infrastructure.events import event_bus as default_event_bus
from customers.domain.customer import Customer
from customers.domain.events import CustomerProvisioned
from customers.ports.customer_repository import CustomerRepository

logger = logging.getLogger(__name__)


class IdentityResolver:
    """Resolve sessions to staff, customer or anonymous identities."""

    def __init__(
        self,
        profile_repository: ProfileRepository,
        customer_repository: CustomerRepository,
        event_bus: Optional[EventBus] = None,
    ):
        """Initialize resolver with repositories."""
        self.profile_repository = profile_repository
        self.customer_repository = customer_repository
        self.event_bus = event_bus or default_event_bus

    async def resolve(self, session: AuthSession) -> ResolvedIdentity:
        """
        Resolve an authenticated session.

        Args:
            session: Subject id, email and metadata of the session

        Returns:
            ResolvedIdentity tagged staff, customer or none

        Raises:
            StoreError: If the profile or customer-by-email lookup fails
        """
        profile = await self.profile_repository.find_by_id(session.subject_id)
        if profile is not None:
            return ResolvedIdentity(
                subject_id=session.subject_id,
                email=session.email,
                kind=IdentityKind.STAFF,
                profile=profile,
            )

        customer = await self._find_customer(session)
        if customer is None and session.email:
            customer = (await self._provision_customer(session)).customer

        return ResolvedIdentity(
            subject_id=session.subject_id,
            email=session.email,
            kind=IdentityKind.CUSTOMER if customer is not None else IdentityKind.NONE,
            customer=customer,
        )

    async def _find_customer(self, session: AuthSession) -> Optional[Customer]:
        # Email first: the identity link is missing on legacy rows.
        if session.email:
            customer = await self.customer_repository.find_by_email(session.email)
            if customer is not None:
                return customer
        return await self.customer_repository.find_by_auth_user_id(session.subject_id)

    async def _provision_customer(self, session: AuthSession) -> CustomerProvisioning:
        metadata = session.metadata or {}
        try:
            customer = Customer.create(
                email=session.email,
                full_name=metadata.get("full_name"),
                company=metadata.get("company_name") or metadata.get("company"),
                auth_user_id=session.subject_id,
            )
            saved = await self._save_provisioned(customer)
        except (DomainException, ValueError) as exc:
            logger.error(
                "Customer auto-provisioning failed",
                extra={"subject_id": session.subject_id, "error": str(exc)},
            )
            return CustomerProvisioning(customer=None, error=exc)

        logger.info(
            "Customer record created on login",
            extra={"subject_id": session.subject_id, "customer_id": str(saved.id)},
        )
        await self.event_bus.publish(
            CustomerProvisioned(customer_id=saved.id, email=saved.email, source="login")
        )
        return CustomerProvisioning(customer=saved)

    async def _save_provisioned(self, customer: Customer) -> Customer:
        try:
            return await self.customer_repository.save(customer)
        except DuplicateRecordError:
            raise
        except StoreError as exc:
            # Legacy customer tables have no identity-link column.
            logger.warning(
                "Customer insert with identity link failed, retrying without it",
                extra={"subject_id": customer.auth_user_id, "error": str(exc)},
            )
            return await self.customer_repository.save(replace(customer, auth_user_id=None))
