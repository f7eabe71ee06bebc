"""
Staff and account DTOs for API responses.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from accounts.domain.profile import Profile


@dataclass
class ProfileDTO:
    """DTO for a staff profile."""

    id: str
    email: str
    full_name: str
    phone: Optional[str]
    role: str
    role_label: str
    is_active: bool
    created_at: datetime

    @classmethod
    def from_entity(cls, profile: Profile) -> "ProfileDTO":
        return cls(
            id=profile.id,
            email=profile.email,
            full_name=profile.full_name,
            phone=profile.phone,
            role=profile.role.value,
            role_label=profile.role.label,
            is_active=profile.is_active,
            created_at=profile.created_at,
        )


@dataclass
class CreateStaffResultDTO:
    """
    DTO for staff provisioning.

    ``warning`` is set when the account exists but its profile could not
    be written.
    """

    success: bool
    user_id: str
    profile: Optional[ProfileDTO] = None
    warning: Optional[str] = None


@dataclass
class StaffListDTO:
    """DTO for the staff list, with the roles the requester may create."""

    staff: List[ProfileDTO]
    creatable_roles: List[str]


@dataclass
class RegisteredCustomerDTO:
    """DTO for customer sign-up."""

    user_id: str
    customer_id: uuid.UUID
    email: str
