"""
Sale repository port (interface).
"""
from abc import ABC, abstractmethod
from typing import List, Optional
import uuid

from sales.domain.sale import Sale


class SaleRepository(ABC):
    """
    Abstract repository for Sale entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    async def save(self, sale: Sale) -> Sale:
        """
        Save a sale entity.

        Args:
            sale: Sale entity to save

        Returns:
            Saved sale entity
        """
        pass

    @abstractmethod
    async def find_pending_for_subscription(self, subscription_id: uuid.UUID) -> Optional[Sale]:
        """
        Find a sale with pending payment for a subscription.

        Args:
            subscription_id: Subscription UUID

        Returns:
            Sale entity or None if not found
        """
        pass

    @abstractmethod
    async def list_for_subscription(self, subscription_id: uuid.UUID) -> List[Sale]:
        """
        List every sale of a subscription, oldest first.

        Args:
            subscription_id: Subscription UUID

        Returns:
            List of Sale entities
        """
        pass
