"""
Customer domain entity.

A customer is the purchaser of licenses. Customers may exist without an
identity-provider account (legacy rows, staff-created records), so the
link to an identity subject is optional.
"""
import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional

from core.domain.value_objects import Email


@dataclass(frozen=True)
class Customer:
    """
    Customer domain entity.

    Immutable; updates produce a new instance.
    """

    id: uuid.UUID
    email: str
    full_name: str
    company: Optional[str]
    phone: Optional[str]
    is_active: bool
    auth_user_id: Optional[str]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def create(
        cls,
        email: str,
        full_name: Optional[str] = None,
        company: Optional[str] = None,
        phone: Optional[str] = None,
        auth_user_id: Optional[str] = None,
        customer_id: Optional[uuid.UUID] = None,
    ) -> "Customer":
        """
        Create a new active Customer.

        Args:
            email: Customer email address
            full_name: Display name, defaults to the email's local part
            company: Optional company name
            phone: Optional phone number
            auth_user_id: Identity-provider subject id, if known
            customer_id: Optional UUID (generated if not provided)

        Returns:
            Customer entity instance
        """
        address = Email(email.strip().lower())
        now = datetime.now(timezone.utc)
        return cls(
            id=customer_id or uuid.uuid4(),
            email=str(address),
            full_name=(full_name or "").strip() or address.local_part,
            company=company or None,
            phone=phone or None,
            is_active=True,
            auth_user_id=auth_user_id,
            created_at=now,
            updated_at=now,
        )

    def link_identity(self, auth_user_id: str) -> "Customer":
        """Return a copy linked to an identity-provider subject."""
        return replace(self, auth_user_id=auth_user_id, updated_at=datetime.now(timezone.utc))
