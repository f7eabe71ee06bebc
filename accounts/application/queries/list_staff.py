"""
ListStaffQuery.

Query to list staff profiles.
"""
from dataclasses import dataclass

from accounts.domain.identity import ResolvedIdentity


@dataclass
class ListStaffQuery:
    """Query for every staff profile, visible to any active staff member."""

    requested_by: ResolvedIdentity
