"""
Staff management commands.
"""
from dataclasses import dataclass
from typing import Optional

from accounts.domain.identity import ResolvedIdentity


@dataclass
class CreateStaffCommand:
    """
    Command to provision a staff account.

    Creates an identity-provider account, then a matching profile.
    ``requested_by`` is None for trusted callers (bootstrap, admin site).
    """

    email: str
    password: str
    full_name: str
    phone: Optional[str] = None
    role: Optional[str] = None
    requested_by: Optional[ResolvedIdentity] = None


@dataclass
class UpdateStaffCommand:
    """Command to edit a staff profile."""

    profile_id: str
    requested_by: ResolvedIdentity
    full_name: Optional[str] = None
    phone: Optional[str] = None
    role: Optional[str] = None
    is_active: Optional[bool] = None


@dataclass
class DeleteStaffCommand:
    """Command to delete a staff profile."""

    profile_id: str
    requested_by: ResolvedIdentity
