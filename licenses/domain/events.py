"""
License domain events.

Domain events represent something that happened in the license domain.
"""

import uuid
from dataclasses import dataclass

from core.domain.events import DomainEvent


@dataclass(frozen=True)
class LicenseActivated(DomainEvent):
    """Event raised when a paid subscription activates its license."""

    license_id: uuid.UUID
    subscription_id: uuid.UUID

    @property
    def aggregate_id(self) -> str:
        return str(self.license_id)


@dataclass(frozen=True)
class LicenseSeatActivated(DomainEvent):
    """Event raised when a product consumes an activation seat."""

    license_id: uuid.UUID
    current_activations: int
    max_activations: int

    @property
    def aggregate_id(self) -> str:
        return str(self.license_id)


@dataclass(frozen=True)
class LicenseRevoked(DomainEvent):
    """Event raised when staff revoke a license."""

    license_id: uuid.UUID
    previous_status: str

    @property
    def aggregate_id(self) -> str:
        return str(self.license_id)
