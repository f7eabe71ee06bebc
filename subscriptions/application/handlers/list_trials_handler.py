"""
ListTrialsHandler.

Trial expiry is a read-time classification: nothing is written here.
"""
from datetime import datetime, timezone
from typing import List

from accounts.domain.policies import RolePolicy
from core.domain.exceptions import PermissionDeniedError
from subscriptions.application.dto.subscription_dto import SubscriptionDTO
from subscriptions.application.queries.list_trials import ListTrialsQuery
from subscriptions.ports.subscription_repository import SubscriptionRepository


class ListTrialsHandler:
    """Handler for ListTrialsQuery."""

    def __init__(self, subscription_repository: SubscriptionRepository):
        """Initialize handler with repositories."""
        self.subscription_repository = subscription_repository

    async def handle(self, query: ListTrialsQuery) -> List[SubscriptionDTO]:
        """
        Handle list trials query.

        Args:
            query: ListTrialsQuery

        Returns:
            Trials ended before now (expired) or still running, by trial end

        Raises:
            PermissionDeniedError: If the requester is not staff
        """
        if not RolePolicy.is_staff(query.requested_by):
            raise PermissionDeniedError("Not authorized - staff only")
        now = query.now or datetime.now(timezone.utc)
        trials = await self.subscription_repository.find_trials(expired=query.expired, now=now)
        return [SubscriptionDTO.from_entity(trial, now) for trial in trials]
