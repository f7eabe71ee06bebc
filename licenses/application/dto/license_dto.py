"""
License DTOs for API responses.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from licenses.domain.license import License


@dataclass
class LicenseDTO:
    """DTO for license information."""

    id: uuid.UUID
    license_key: str
    subscription_id: uuid.UUID
    status: str
    max_activations: int
    current_activations: int
    seats_remaining: int
    expiration_date: Optional[datetime]

    @classmethod
    def from_entity(cls, license: License, now: Optional[datetime] = None) -> "LicenseDTO":
        return cls(
            id=license.id,
            license_key=license.license_key,
            subscription_id=license.subscription_id,
            status=license.effective_status(now).value,
            max_activations=license.max_activations,
            current_activations=license.current_activations,
            seats_remaining=license.seats_remaining,
            expiration_date=license.expiration_date,
        )
