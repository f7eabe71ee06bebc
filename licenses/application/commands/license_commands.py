"""
License commands.
"""
import uuid
from dataclasses import dataclass

from accounts.domain.identity import ResolvedIdentity


@dataclass
class RevokeLicenseCommand:
    """Command to revoke a license. Staff only."""

    license_id: uuid.UUID
    requested_by: ResolvedIdentity


@dataclass
class ActivateSeatCommand:
    """Command for a product to consume one activation seat of a license key."""

    license_key: str
