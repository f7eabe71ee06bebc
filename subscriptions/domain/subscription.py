"""
Subscription domain entity.

This is the core domain entity representing a customer's agreement to a
product. Lifecycle status and payment status are independent axes: a
failed payment leaves the subscription ``pending`` so the customer can
retry against it.
"""
import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Optional

from core.domain.exceptions import InvalidSubscriptionStatusError
from core.domain.value_objects import PaymentStatus, SubscriptionStatus, SubscriptionType


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Subscription:
    """
    Subscription domain entity.

    Represents a purchase intent for a product.
    This is an immutable value object with business logic.
    """

    id: uuid.UUID
    customer_id: uuid.UUID
    product_id: uuid.UUID
    subscription_type: SubscriptionType
    status: SubscriptionStatus
    payment_status: PaymentStatus
    amount: Decimal
    currency: str
    trial_ends_at: Optional[datetime]
    auto_renew: bool
    created_at: datetime
    updated_at: datetime

    def __post_init__(self):
        """Validate subscription entity."""
        if not self.customer_id:
            raise ValueError("Customer ID is required")
        if not self.product_id:
            raise ValueError("Product ID is required")
        if self.amount < 0:
            raise ValueError("Amount cannot be negative")

    @classmethod
    def create(
        cls,
        customer_id: uuid.UUID,
        product_id: uuid.UUID,
        subscription_type: SubscriptionType,
        amount: Decimal,
        currency: str = "EUR",
        trial_days: Optional[int] = None,
        auto_renew: bool = False,
        subscription_id: Optional[uuid.UUID] = None,
    ) -> "Subscription":
        """
        Create a new pending Subscription at checkout.

        Args:
            customer_id: Customer UUID
            product_id: Product UUID
            subscription_type: Billing kind
            amount: Price carried by the subscription
            currency: ISO currency code
            trial_days: Trial length, only used for trial subscriptions
            auto_renew: Whether the subscription renews automatically
            subscription_id: Optional UUID (generated if not provided)

        Returns:
            Subscription entity instance
        """
        now = _utcnow()
        trial_ends_at = None
        if subscription_type is SubscriptionType.TRIAL and trial_days:
            trial_ends_at = now + timedelta(days=trial_days)
        return cls(
            id=subscription_id or uuid.uuid4(),
            customer_id=customer_id,
            product_id=product_id,
            subscription_type=subscription_type,
            status=SubscriptionStatus.PENDING,
            payment_status=PaymentStatus.PENDING,
            amount=Decimal(amount),
            currency=currency.upper(),
            trial_ends_at=trial_ends_at,
            auto_renew=auto_renew,
            created_at=now,
            updated_at=now,
        )

    def confirm_payment(self) -> "Subscription":
        """
        Activate a pending subscription after a confirmed payment.

        Returns:
            New Subscription instance, active and paid

        Raises:
            InvalidSubscriptionStatusError: If the subscription is not pending
        """
        if self.status is not SubscriptionStatus.PENDING:
            raise InvalidSubscriptionStatusError(
                f"Cannot confirm payment for a {self.status.value} subscription"
            )
        return replace(
            self,
            status=SubscriptionStatus.ACTIVE,
            payment_status=PaymentStatus.PAID,
            updated_at=_utcnow(),
        )

    def mark_payment_failed(self) -> "Subscription":
        """
        Record a failed payment. The lifecycle status is left unchanged.

        Returns:
            New Subscription instance with payment status failed
        """
        return replace(self, payment_status=PaymentStatus.FAILED, updated_at=_utcnow())

    def is_trial(self) -> bool:
        """Check whether this subscription is a trial."""
        return (
            self.status is SubscriptionStatus.TRIAL
            or self.subscription_type is SubscriptionType.TRIAL
        )

    def is_trial_expired(self, current_time: Optional[datetime] = None) -> bool:
        """
        Check whether a trial has run out.

        Args:
            current_time: Current time (defaults to now)

        Returns:
            True if this is a trial whose end lies in the past
        """
        if not self.is_trial() or self.trial_ends_at is None:
            return False
        return self.trial_ends_at < (current_time or _utcnow())

    def effective_status(self, current_time: Optional[datetime] = None) -> SubscriptionStatus:
        """
        Status as reported to readers.

        Trial expiry is never stored; it is derived here at read time.
        """
        if self.is_trial_expired(current_time):
            return SubscriptionStatus.EXPIRED
        return self.status
