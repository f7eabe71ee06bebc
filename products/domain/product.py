"""
Product domain entity.

A product is what a subscription buys. Its price, currency and billing
kind seed new subscriptions at checkout.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from core.domain.value_objects import SubscriptionType


@dataclass(frozen=True)
class Product:
    """Product domain entity."""

    id: uuid.UUID
    sku: str
    name: str
    price: Decimal
    currency: str
    subscription_type: SubscriptionType
    trial_days: Optional[int]
    max_activations: int
    is_active: bool
    created_at: datetime

    def __post_init__(self):
        """Validate product entity."""
        if not self.sku:
            raise ValueError("Product SKU is required")
        if self.max_activations < 1:
            raise ValueError("Max activations must be at least 1")
