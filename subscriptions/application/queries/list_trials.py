"""
ListTrialsQuery.

Query for trial subscriptions on either side of their expiry.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from accounts.domain.identity import ResolvedIdentity


@dataclass
class ListTrialsQuery:
    """Query for expired (``expired=True``) or running trials."""

    expired: bool
    requested_by: ResolvedIdentity
    now: Optional[datetime] = None
