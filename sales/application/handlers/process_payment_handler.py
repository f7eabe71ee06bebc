"""
ProcessPaymentHandler.

Handles the process payment command through the store's atomic
``process_payment`` procedure. Reconciliation of provider events does
not use this path.
"""
import logging
import uuid

from accounts.domain.policies import RolePolicy
from core.domain.exceptions import PermissionDeniedError, ValidationError
from core.domain.value_objects import Email
from core.ports.record_store import RecordStore
from sales.application.commands.process_payment import ProcessPaymentCommand
from sales.application.dto.payment_dto import ProcessedPaymentDTO

logger = logging.getLogger(__name__)

PROCESS_PAYMENT = "process_payment"


class ProcessPaymentHandler:
    """Handler for ProcessPaymentCommand."""

    def __init__(self, store: RecordStore):
        """Initialize handler with the record store."""
        self.store = store

    async def handle(self, command: ProcessPaymentCommand) -> ProcessedPaymentDTO:
        """
        Handle process payment command.

        Args:
            command: ProcessPaymentCommand

        Returns:
            ProcessedPaymentDTO with the written record ids

        Raises:
            PermissionDeniedError: If the requester is not an admin
            ValidationError: If the email or SKU is missing or invalid
            ProductNotFoundError: If no product has the SKU
            UnknownProcedureError: If the store does not offer the procedure
        """
        if command.requested_by is not None and not RolePolicy.is_admin(command.requested_by):
            raise PermissionDeniedError("Not authorized - admin only")
        if not command.customer_email or not command.product_sku:
            raise ValidationError("Missing required fields: customer_email, product_sku")
        try:
            email = str(Email(command.customer_email.strip().lower()))
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc

        result = await self.store.call(
            PROCESS_PAYMENT,
            {
                "customer_email": email,
                "customer_name": command.customer_name,
                "product_sku": command.product_sku,
                "payment_reference": command.payment_reference,
            },
        )
        logger.info(
            "Payment processed through store procedure",
            extra={"product_sku": command.product_sku, "sale_id": str(result["sale_id"])},
        )
        return ProcessedPaymentDTO(
            customer_id=uuid.UUID(str(result["customer_id"])),
            subscription_id=uuid.UUID(str(result["subscription_id"])),
            license_id=uuid.UUID(str(result["license_id"])),
            license_key=result["license_key"],
            sale_id=uuid.UUID(str(result["sale_id"])),
        )
