"""
License domain entity.

This is the core domain entity representing an activatable license key.
It contains business logic and is independent of infrastructure.
"""
import secrets
import string
import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional

from core.domain.exceptions import InvalidLicenseStatusError, SeatLimitExceededError
from core.domain.value_objects import LicenseStatus


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def generate_license_key(prefix: str) -> str:
    """
    Generate a license key in format: PREFIX-XXXX-XXXX-XXXX-XXXX.

    Args:
        prefix: Key prefix (e.g., 'LIC')

    Returns:
        Generated license key string
    """
    chars = string.ascii_uppercase + string.digits
    parts = ["".join(secrets.choice(chars) for _ in range(4)) for _ in range(4)]
    return f"{prefix}-{'-'.join(parts)}"


@dataclass(frozen=True)
class License:
    """
    License domain entity.

    Represents a license derived from a subscription.
    This is an immutable value object with business logic.
    """

    id: uuid.UUID
    subscription_id: uuid.UUID
    customer_id: Optional[uuid.UUID]
    product_id: Optional[uuid.UUID]
    license_key: str
    status: LicenseStatus
    max_activations: int
    current_activations: int
    expiration_date: Optional[datetime]
    activated_at: Optional[datetime]
    created_at: datetime
    updated_at: datetime

    def __post_init__(self):
        """Validate license entity."""
        if not self.license_key or not self.license_key.strip():
            raise ValueError("License key cannot be empty")
        if self.max_activations < 1:
            raise ValueError("Max activations must be at least 1")
        if not 0 <= self.current_activations <= self.max_activations:
            raise ValueError("Current activations must be between 0 and max activations")

    @classmethod
    def create(
        cls,
        subscription_id: uuid.UUID,
        key_prefix: str,
        customer_id: Optional[uuid.UUID] = None,
        product_id: Optional[uuid.UUID] = None,
        max_activations: int = 1,
        expiration_date: Optional[datetime] = None,
        license_id: Optional[uuid.UUID] = None,
    ) -> "License":
        """
        Create a new inactive License for a subscription.

        Args:
            subscription_id: Parent subscription UUID
            key_prefix: Prefix for the generated license key
            customer_id: Owning customer UUID
            product_id: Licensed product UUID
            max_activations: Maximum number of activations
            expiration_date: Optional expiration datetime
            license_id: Optional UUID (generated if not provided)

        Returns:
            License entity instance
        """
        now = _utcnow()
        return cls(
            id=license_id or uuid.uuid4(),
            subscription_id=subscription_id,
            customer_id=customer_id,
            product_id=product_id,
            license_key=generate_license_key(key_prefix),
            status=LicenseStatus.INACTIVE,
            max_activations=max_activations,
            current_activations=0,
            expiration_date=expiration_date,
            activated_at=None,
            created_at=now,
            updated_at=now,
        )

    def is_expired(self, current_time: Optional[datetime] = None) -> bool:
        """
        Check if license is past its expiration date.

        Expiry is never stored by this core; it is derived at read time.

        Args:
            current_time: Current time (defaults to now)

        Returns:
            True if the license is expired
        """
        if self.status is LicenseStatus.EXPIRED:
            return True
        if self.expiration_date is None:
            return False
        return self.expiration_date < (current_time or _utcnow())

    def effective_status(self, current_time: Optional[datetime] = None) -> LicenseStatus:
        """Status as reported to readers, with read-time expiry applied."""
        if self.status is LicenseStatus.ACTIVE and self.is_expired(current_time):
            return LicenseStatus.EXPIRED
        return self.status

    def activate_for_subscription(self) -> "License":
        """
        Activate an inactive license once its subscription is paid.

        Returns:
            New License instance, active with one activation

        Raises:
            InvalidLicenseStatusError: If the license is not inactive
        """
        if self.status is not LicenseStatus.INACTIVE:
            raise InvalidLicenseStatusError(
                f"Cannot activate a {self.status.value} license for its subscription"
            )
        now = _utcnow()
        return replace(
            self,
            status=LicenseStatus.ACTIVE,
            current_activations=1,
            activated_at=now,
            updated_at=now,
        )

    def revoke(self) -> "License":
        """
        Revoke the license. Terminal, allowed from any status.

        Returns:
            New License instance with revoked status
        """
        return replace(self, status=LicenseStatus.REVOKED, updated_at=_utcnow())

    def record_activation(self, current_time: Optional[datetime] = None) -> "License":
        """
        Consume one activation seat.

        Args:
            current_time: Current time (defaults to now)

        Returns:
            New License instance with one more activation

        Raises:
            InvalidLicenseStatusError: If the license is not active or has expired
            SeatLimitExceededError: If every seat is taken
        """
        if self.status is LicenseStatus.REVOKED:
            raise InvalidLicenseStatusError("License has been revoked")
        if self.status is not LicenseStatus.ACTIVE:
            raise InvalidLicenseStatusError("License is not active")
        if self.is_expired(current_time):
            raise InvalidLicenseStatusError("License has expired")
        if self.current_activations >= self.max_activations:
            raise SeatLimitExceededError(
                f"License activation limit reached ({self.max_activations})"
            )
        return replace(
            self,
            current_activations=self.current_activations + 1,
            updated_at=_utcnow(),
        )

    @property
    def seats_remaining(self) -> int:
        """Number of activations still available."""
        return self.max_activations - self.current_activations
