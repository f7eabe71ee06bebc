"""
Sale domain events.
"""

import uuid
from dataclasses import dataclass
from decimal import Decimal

from core.domain.events import DomainEvent


@dataclass(frozen=True)
class SaleRecorded(DomainEvent):
    """Event raised when a confirmed payment is written as a paid sale."""

    sale_id: uuid.UUID
    subscription_id: uuid.UUID
    amount: Decimal
    currency: str
    updated_existing: bool

    @property
    def aggregate_id(self) -> str:
        return str(self.sale_id)
