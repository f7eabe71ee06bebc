"""
Profile domain entity.

A profile is a staff member's identity inside the back office. Its id is
the identity-provider subject id of the staff account.
"""
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional

from core.domain.value_objects import Email, UserRole


@dataclass(frozen=True)
class Profile:
    """
    Staff profile domain entity.

    Used only for authorization decisions.
    """

    id: str
    email: str
    full_name: str
    phone: Optional[str]
    role: UserRole
    is_active: bool
    created_at: datetime
    updated_at: datetime

    def __post_init__(self):
        """Validate profile entity."""
        if not self.id:
            raise ValueError("Profile ID is required")

    @classmethod
    def create(
        cls,
        subject_id: str,
        email: str,
        full_name: str,
        role: UserRole = UserRole.STAFF,
        phone: Optional[str] = None,
    ) -> "Profile":
        """
        Create an active staff profile.

        Args:
            subject_id: Identity-provider subject id
            email: Staff email address
            full_name: Display name
            role: Staff role (defaults to staff)
            phone: Optional phone number

        Returns:
            Profile entity instance
        """
        now = datetime.now(timezone.utc)
        return cls(
            id=subject_id,
            email=str(Email(email.strip().lower())),
            full_name=full_name.strip(),
            phone=phone or None,
            role=role,
            is_active=True,
            created_at=now,
            updated_at=now,
        )

    def update(
        self,
        full_name: Optional[str] = None,
        phone: Optional[str] = None,
        role: Optional[UserRole] = None,
        is_active: Optional[bool] = None,
    ) -> "Profile":
        """Return a copy with the given fields changed."""
        return replace(
            self,
            full_name=full_name.strip() if full_name is not None else self.full_name,
            phone=phone if phone is not None else self.phone,
            role=role or self.role,
            is_active=self.is_active if is_active is None else is_active,
            updated_at=datetime.now(timezone.utc),
        )
