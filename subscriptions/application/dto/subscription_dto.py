"""
Subscription DTOs for API responses.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from subscriptions.domain.subscription import Subscription


@dataclass
class SubscriptionDTO:
    """DTO for subscription information."""

    id: uuid.UUID
    customer_id: uuid.UUID
    product_id: uuid.UUID
    subscription_type: str
    status: str
    payment_status: str
    amount: Decimal
    currency: str
    trial_ends_at: Optional[datetime]
    created_at: datetime

    @classmethod
    def from_entity(
        cls, subscription: Subscription, now: Optional[datetime] = None
    ) -> "SubscriptionDTO":
        return cls(
            id=subscription.id,
            customer_id=subscription.customer_id,
            product_id=subscription.product_id,
            subscription_type=subscription.subscription_type.value,
            status=subscription.effective_status(now).value,
            payment_status=subscription.payment_status.value,
            amount=subscription.amount,
            currency=subscription.currency,
            trial_ends_at=subscription.trial_ends_at,
            created_at=subscription.created_at,
        )


@dataclass
class CheckoutDTO:
    """DTO for a started checkout."""

    subscription: SubscriptionDTO
    license_id: uuid.UUID
    license_key: str
    sale_id: uuid.UUID
