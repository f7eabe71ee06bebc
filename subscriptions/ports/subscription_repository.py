"""
Subscription repository port (interface).

This defines the contract for subscription persistence operations.
Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
import uuid

from subscriptions.domain.subscription import Subscription


class SubscriptionRepository(ABC):
    """
    Abstract repository for Subscription entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    async def save(self, subscription: Subscription) -> Subscription:
        """
        Save a subscription entity.

        Args:
            subscription: Subscription entity to save

        Returns:
            Saved subscription entity
        """
        pass

    @abstractmethod
    async def find_by_id(self, subscription_id: uuid.UUID) -> Optional[Subscription]:
        """
        Find a subscription by ID.

        Args:
            subscription_id: Subscription UUID

        Returns:
            Subscription entity or None if not found
        """
        pass

    @abstractmethod
    async def find_latest_pending_for_customer(
        self, customer_id: uuid.UUID
    ) -> Optional[Subscription]:
        """
        Find the most recently created pending subscription of a customer.

        Args:
            customer_id: Customer UUID

        Returns:
            Newest pending Subscription or None
        """
        pass

    @abstractmethod
    async def mark_pending_payment_failed(self, customer_id: uuid.UUID) -> List[Subscription]:
        """
        Set payment status ``failed`` on every pending subscription of a customer.

        The lifecycle status is not changed.

        Args:
            customer_id: Customer UUID

        Returns:
            The updated subscriptions
        """
        pass

    @abstractmethod
    async def find_trials(self, expired: bool, now: datetime) -> List[Subscription]:
        """
        Find trial subscriptions on one side of their expiry.

        Args:
            expired: True for trials ended before ``now``, False for running ones
            now: Reference time

        Returns:
            Trial subscriptions ordered by trial end, most recently ended
            first for expired trials and soonest ending first otherwise
        """
        pass
