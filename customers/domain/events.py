"""
Customer domain events.
"""

import uuid
from dataclasses import dataclass

from core.domain.events import DomainEvent


@dataclass(frozen=True)
class CustomerProvisioned(DomainEvent):
    """Event raised when a customer record is created for an identity."""

    customer_id: uuid.UUID
    email: str
    source: str

    @property
    def aggregate_id(self) -> str:
        return str(self.customer_id)
