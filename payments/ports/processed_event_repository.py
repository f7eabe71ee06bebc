"""
Processed payment event repository port (interface).

Ledger of provider event ids already reconciled.
"""
from abc import ABC, abstractmethod


class ProcessedEventRepository(ABC):
    """Abstract dedup ledger for provider events."""

    @abstractmethod
    async def claim(self, event_id: str, event_type: str) -> bool:
        """
        Record an event id as being processed.

        Args:
            event_id: Provider event id
            event_type: Provider event type

        Returns:
            True if this call claimed the id, False if it was already recorded
        """
        pass

    @abstractmethod
    async def release(self, event_id: str) -> None:
        """
        Forget a claimed event id so a redelivery is processed again.

        Args:
            event_id: Provider event id
        """
        pass
