"""
Identity types.

An authenticated session is resolved to exactly one of staff, customer
or none before any authorization decision is taken.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from accounts.domain.profile import Profile
from core.domain.value_objects import IdentityKind
from customers.domain.customer import Customer


@dataclass(frozen=True)
class IdentityUser:
    """An account held by the identity provider."""

    subject_id: str
    email: Optional[str]
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class AuthSession:
    """An authenticated session: who is calling, as the provider sees it."""

    subject_id: str
    email: Optional[str]
    metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def for_user(cls, user: IdentityUser) -> "AuthSession":
        return cls(subject_id=user.subject_id, email=user.email, metadata=dict(user.metadata))


@dataclass(frozen=True)
class ResolvedIdentity:
    """Result of identity resolution."""

    subject_id: str
    email: Optional[str]
    kind: IdentityKind
    profile: Optional[Profile] = None
    customer: Optional[Customer] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return {
            "subject_id": self.subject_id,
            "email": self.email,
            "kind": self.kind.value,
            "profile": None
            if self.profile is None
            else {
                "id": self.profile.id,
                "email": self.profile.email,
                "full_name": self.profile.full_name,
                "role": self.profile.role.value,
                "role_label": self.profile.role.label,
                "is_active": self.profile.is_active,
            },
            "customer": None
            if self.customer is None
            else {
                "id": str(self.customer.id),
                "email": self.customer.email,
                "full_name": self.customer.full_name,
                "company": self.customer.company,
                "is_active": self.customer.is_active,
            },
        }


@dataclass(frozen=True)
class CustomerProvisioning:
    """
    Outcome of a best-effort customer auto-provisioning attempt.

    The resolver logs a failed attempt and carries on without a customer.
    """

    customer: Optional[Customer]
    error: Optional[Exception] = None

    @property
    def succeeded(self) -> bool:
        return self.customer is not None
