"""
Value objects for the domain.

Value objects are immutable objects that are defined by their attributes
rather than their identity. They have no identity and are compared by value.
"""
from abc import ABC
from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects.

    Value objects are immutable and compared by value.
    """

    def __eq__(self, other):
        """Compare value objects by their attributes."""
        if not isinstance(other, self.__class__):
            return False
        return self.__dict__ == other.__dict__

    def __hash__(self):
        """Make value objects hashable."""
        return hash(tuple(sorted(self.__dict__.items())))


@dataclass(frozen=True)
class Email(ValueObject):
    """Email value object with validation."""

    value: str

    def __post_init__(self):
        """Validate email format."""
        if not self.value or "@" not in self.value:
            raise ValueError(f"Invalid email address: {self.value}")
        local, _, domain = self.value.partition("@")
        if not local or not domain:
            raise ValueError(f"Invalid email address: {self.value}")

    @property
    def local_part(self) -> str:
        """Return the part before the @ sign."""
        return self.value.split("@", 1)[0]

    def __str__(self) -> str:
        """Return email as string."""
        return self.value


class UserRole(Enum):
    """Staff role. Closed set, ordered from most to least privileged."""

    SUPER_ADMIN = "super_admin"
    ADMIN = "admin"
    STAFF = "staff"

    @property
    def label(self) -> str:
        """Human-readable role name."""
        return {
            UserRole.SUPER_ADMIN: "Super Admin",
            UserRole.ADMIN: "Administrator",
            UserRole.STAFF: "Staff",
        }[self]

    def __str__(self) -> str:
        return self.value


class IdentityKind(Enum):
    """What an authenticated session resolved to."""

    STAFF = "staff"
    CUSTOMER = "customer"
    NONE = "none"

    def __str__(self) -> str:
        return self.value


class SubscriptionType(Enum):
    """Billing kind of a subscription or product."""

    MONTHLY = "monthly"
    ANNUAL = "annual"
    LIFETIME = "lifetime"
    TRIAL = "trial"

    def __str__(self) -> str:
        return self.value


class SubscriptionStatus(Enum):
    """Lifecycle status of a subscription."""

    PENDING = "pending"
    ACTIVE = "active"
    TRIAL = "trial"
    CANCELLED = "cancelled"
    EXPIRED = "expired"

    def __str__(self) -> str:
        return self.value


class PaymentStatus(Enum):
    """Payment axis shared by subscriptions and sales."""

    PAID = "paid"
    PENDING = "pending"
    FAILED = "failed"
    REFUNDED = "refunded"

    def __str__(self) -> str:
        return self.value


class LicenseStatus(Enum):
    """License status value object."""

    INACTIVE = "inactive"
    ACTIVE = "active"
    EXPIRED = "expired"
    REVOKED = "revoked"

    def __str__(self) -> str:
        """Return status as string."""
        return self.value
