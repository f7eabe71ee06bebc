"""
StartCheckoutHandler.

Handles the start checkout command.
"""
import logging
from typing import Optional

from accounts.domain.policies import RolePolicy
from core.domain.events import EventBus
from core.domain.exceptions import (
    CustomerNotFoundError,
    PermissionDeniedError,
    ProductNotFoundError,
    ValidationError,
)
from core.infrastructure.events import event_bus as default_event_bus
from customers.ports.customer_repository import CustomerRepository
from licenses.domain.license import License
from licenses.ports.license_repository import LicenseRepository
from products.ports.product_repository import ProductRepository
from sales.domain.sale import Sale
from sales.ports.sale_repository import SaleRepository
from subscriptions.application.commands.start_checkout import StartCheckoutCommand
from subscriptions.application.dto.subscription_dto import CheckoutDTO, SubscriptionDTO
from subscriptions.domain.events import CheckoutStarted
from subscriptions.domain.subscription import Subscription
from subscriptions.ports.subscription_repository import SubscriptionRepository

logger = logging.getLogger(__name__)


class StartCheckoutHandler:
    """Handler for StartCheckoutCommand."""

    def __init__(
        self,
        customer_repository: CustomerRepository,
        product_repository: ProductRepository,
        subscription_repository: SubscriptionRepository,
        license_repository: LicenseRepository,
        sale_repository: SaleRepository,
        license_key_prefix: str = "LIC",
        event_bus: Optional[EventBus] = None,
    ):
        """Initialize handler with repositories."""
        self.customer_repository = customer_repository
        self.product_repository = product_repository
        self.subscription_repository = subscription_repository
        self.license_repository = license_repository
        self.sale_repository = sale_repository
        self.license_key_prefix = license_key_prefix
        self.event_bus = event_bus or default_event_bus

    def _authorize(self, command: StartCheckoutCommand) -> None:
        identity = command.requested_by
        if identity is None or RolePolicy.is_staff(identity):
            return
        if RolePolicy.is_customer(identity) and identity.customer.id == command.customer_id:
            return
        raise PermissionDeniedError("Customers can only start checkouts for themselves")

    async def handle(self, command: StartCheckoutCommand) -> CheckoutDTO:
        """
        Handle start checkout command.

        Args:
            command: StartCheckoutCommand

        Returns:
            CheckoutDTO with the pending subscription, its license and sale

        Raises:
            PermissionDeniedError: If the requester may not buy for the customer
            CustomerNotFoundError: If customer not found
            ProductNotFoundError: If product not found
            ValidationError: If the customer or product is inactive
        """
        self._authorize(command)

        customer = await self.customer_repository.find_by_id(command.customer_id)
        if customer is None:
            raise CustomerNotFoundError(f"Customer {command.customer_id} not found")
        if not customer.is_active:
            raise ValidationError("Customer account is inactive")

        product = await self.product_repository.find_by_id(command.product_id)
        if product is None:
            raise ProductNotFoundError(f"Product {command.product_id} not found")
        if not product.is_active:
            raise ValidationError(f"Product {product.sku} is not available")

        subscription = await self.subscription_repository.save(
            Subscription.create(
                customer_id=customer.id,
                product_id=product.id,
                subscription_type=product.subscription_type,
                amount=product.price,
                currency=product.currency,
                trial_days=product.trial_days,
                auto_renew=command.auto_renew,
            )
        )

        license = await self.license_repository.save(
            License.create(
                subscription_id=subscription.id,
                key_prefix=self.license_key_prefix,
                customer_id=customer.id,
                product_id=product.id,
                max_activations=product.max_activations,
            )
        )

        sale = await self.sale_repository.save(
            Sale.create_pending(
                subscription_id=subscription.id,
                amount=subscription.amount,
                currency=subscription.currency,
                customer_id=customer.id,
                product_id=product.id,
                notes=f"Checkout - {product.subscription_type.value}",
            )
        )

        await self.event_bus.publish(
            CheckoutStarted(
                subscription_id=subscription.id,
                customer_id=customer.id,
                product_id=product.id,
                subscription_type=subscription.subscription_type.value,
                license_id=license.id,
            )
        )
        logger.info(
            "Checkout started",
            extra={
                "subscription_id": str(subscription.id),
                "customer_id": str(customer.id),
                "product_sku": product.sku,
            },
        )

        return CheckoutDTO(
            subscription=SubscriptionDTO.from_entity(subscription),
            license_id=license.id,
            license_key=license.license_key,
            sale_id=sale.id,
        )
