"""
RegisterCustomerHandler.

Handles customer self sign-up: an identity account tagged as a customer
account, then the customer record.
"""
import logging
from typing import Optional

from accounts.application.commands.register_customer import RegisterCustomerCommand
from accounts.application.dto.staff_dto import RegisteredCustomerDTO
from accounts.ports.identity_provider import IdentityProvider
from core.domain.events import EventBus
from core.domain.exceptions import (
    DuplicateRecordError,
    EmailAlreadyRegisteredError,
    UserAlreadyExistsError,
    ValidationError,
)
from core.infrastructure.events import event_bus as default_event_bus
from customers.domain.customer import Customer
from customers.domain.events import CustomerProvisioned
from customers.ports.customer_repository import CustomerRepository

logger = logging.getLogger(__name__)


class RegisterCustomerHandler:
    """Handler for RegisterCustomerCommand."""

    def __init__(
        self,
        customer_repository: CustomerRepository,
        identity_provider: IdentityProvider,
        min_password_length: int = 6,
        event_bus: Optional[EventBus] = None,
    ):
        """Initialize handler with repositories."""
        self.customer_repository = customer_repository
        self.identity_provider = identity_provider
        self.min_password_length = min_password_length
        self.event_bus = event_bus or default_event_bus

    async def handle(self, command: RegisterCustomerCommand) -> RegisteredCustomerDTO:
        """
        Handle register customer command.

        A customer row that already exists for the email (created by staff
        or by an earlier partial sign-up) is linked instead of duplicated.

        Raises:
            ValidationError: If fields are missing or invalid
            EmailAlreadyRegisteredError: If an account already uses the email
        """
        if not command.email or not command.password or not command.full_name:
            raise ValidationError("Missing required fields: email, password, fullName")
        if len(command.password) < self.min_password_length:
            raise ValidationError(
                f"Password must be at least {self.min_password_length} characters"
            )
        try:
            customer = Customer.create(
                email=command.email,
                full_name=command.full_name,
                company=command.company,
                phone=command.phone,
            )
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc

        try:
            user = await self.identity_provider.create_user(
                email=customer.email,
                password=command.password,
                metadata={
                    "full_name": customer.full_name,
                    "company_name": customer.company,
                    "user_type": "customer",
                },
                email_confirm=False,
            )
        except UserAlreadyExistsError as exc:
            raise EmailAlreadyRegisteredError("This email is already registered") from exc

        try:
            saved = await self.customer_repository.save(customer.link_identity(user.subject_id))
            await self.event_bus.publish(
                CustomerProvisioned(customer_id=saved.id, email=saved.email, source="signup")
            )
        except DuplicateRecordError:
            existing = await self.customer_repository.find_by_email(customer.email)
            if existing is None:
                raise
            logger.info(
                "Linking existing customer record on sign-up",
                extra={"customer_id": str(existing.id), "subject_id": user.subject_id},
            )
            saved = existing
            if not existing.auth_user_id:
                saved = await self.customer_repository.save(existing.link_identity(user.subject_id))

        return RegisteredCustomerDTO(
            user_id=user.subject_id, customer_id=saved.id, email=saved.email
        )
