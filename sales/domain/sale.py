"""
Sale domain entity.

A sale is the financial record of one payment attempt tied to a
subscription. At most one pending sale is expected per subscription;
reconciliation settles it in place instead of adding another row.
"""
import uuid
from dataclasses import dataclass, replace
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Optional

from core.domain.value_objects import PaymentStatus


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Sale:
    """Sale domain entity."""

    id: uuid.UUID
    subscription_id: uuid.UUID
    customer_id: Optional[uuid.UUID]
    product_id: Optional[uuid.UUID]
    amount: Decimal
    currency: str
    payment_status: PaymentStatus
    payment_method: Optional[str]
    payment_reference: Optional[str]
    sale_date: date
    notes: Optional[str]
    created_at: datetime
    updated_at: datetime

    def __post_init__(self):
        """Validate sale entity."""
        if self.amount < 0:
            raise ValueError("Sale amount cannot be negative")

    @classmethod
    def _new(
        cls,
        payment_status: PaymentStatus,
        subscription_id: uuid.UUID,
        amount: Decimal,
        currency: str,
        customer_id: Optional[uuid.UUID],
        product_id: Optional[uuid.UUID],
        payment_method: Optional[str],
        payment_reference: Optional[str],
        notes: Optional[str],
    ) -> "Sale":
        now = _utcnow()
        return cls(
            id=uuid.uuid4(),
            subscription_id=subscription_id,
            customer_id=customer_id,
            product_id=product_id,
            amount=Decimal(amount),
            currency=currency.upper(),
            payment_status=payment_status,
            payment_method=payment_method,
            payment_reference=payment_reference,
            sale_date=now.date(),
            notes=notes,
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def create_pending(
        cls,
        subscription_id: uuid.UUID,
        amount: Decimal,
        currency: str,
        customer_id: Optional[uuid.UUID] = None,
        product_id: Optional[uuid.UUID] = None,
        notes: Optional[str] = None,
    ) -> "Sale":
        """Create the pending sale opened at checkout."""
        return cls._new(
            PaymentStatus.PENDING,
            subscription_id,
            amount,
            currency,
            customer_id,
            product_id,
            payment_method=None,
            payment_reference=None,
            notes=notes,
        )

    @classmethod
    def create_paid(
        cls,
        subscription_id: uuid.UUID,
        amount: Decimal,
        currency: str,
        customer_id: Optional[uuid.UUID] = None,
        product_id: Optional[uuid.UUID] = None,
        payment_method: Optional[str] = None,
        payment_reference: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> "Sale":
        """Create a sale already settled by a confirmed payment."""
        return cls._new(
            PaymentStatus.PAID,
            subscription_id,
            amount,
            currency,
            customer_id,
            product_id,
            payment_method=payment_method,
            payment_reference=payment_reference,
            notes=notes,
        )

    def mark_paid(
        self,
        amount: Decimal,
        notes: Optional[str] = None,
        payment_method: Optional[str] = None,
        payment_reference: Optional[str] = None,
    ) -> "Sale":
        """
        Settle a pending sale.

        Args:
            amount: Realized amount
            notes: Annotation describing the settlement
            payment_method: How the sale was paid
            payment_reference: External payment reference

        Returns:
            New Sale instance marked paid
        """
        return replace(
            self,
            amount=Decimal(amount),
            payment_status=PaymentStatus.PAID,
            notes=notes if notes is not None else self.notes,
            payment_method=payment_method or self.payment_method,
            payment_reference=payment_reference or self.payment_reference,
            updated_at=_utcnow(),
        )
