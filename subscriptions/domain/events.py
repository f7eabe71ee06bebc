"""
Subscription domain events.

Domain events represent something that happened in the subscription domain.
"""

import uuid
from dataclasses import dataclass
from typing import Optional

from core.domain.events import DomainEvent


@dataclass(frozen=True)
class CheckoutStarted(DomainEvent):
    """Event raised when a pending subscription is opened for a product."""

    subscription_id: uuid.UUID
    customer_id: uuid.UUID
    product_id: uuid.UUID
    subscription_type: str
    license_id: Optional[uuid.UUID] = None

    @property
    def aggregate_id(self) -> str:
        return str(self.subscription_id)


@dataclass(frozen=True)
class SubscriptionActivated(DomainEvent):
    """Event raised when a confirmed payment activates a subscription."""

    subscription_id: uuid.UUID
    customer_id: uuid.UUID

    @property
    def aggregate_id(self) -> str:
        return str(self.subscription_id)


@dataclass(frozen=True)
class SubscriptionPaymentFailed(DomainEvent):
    """Event raised when a failed payment is recorded on a subscription."""

    subscription_id: uuid.UUID
    customer_id: uuid.UUID

    @property
    def aggregate_id(self) -> str:
        return str(self.subscription_id)
