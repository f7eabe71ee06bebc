"""
Record-store implementation of ProcessedEventRepository port.

Claims rely on the unique ``event_id`` column: the insert that loses
the race raises DuplicateRecordError.
"""
from datetime import datetime, timezone

from core.domain.exceptions import DuplicateRecordError
from core.ports.record_store import Collections, RecordStore, eq
from payments.ports.processed_event_repository import ProcessedEventRepository


class StoreProcessedEventRepository(ProcessedEventRepository):
    """RecordStore implementation of ProcessedEventRepository."""

    def __init__(self, store: RecordStore):
        """Initialize repository with the record store."""
        self.store = store

    async def claim(self, event_id: str, event_type: str) -> bool:
        try:
            await self.store.insert(
                Collections.PAYMENT_EVENTS,
                {
                    "event_id": event_id,
                    "event_type": event_type,
                    "created_at": datetime.now(timezone.utc),
                },
            )
        except DuplicateRecordError:
            return False
        return True

    async def release(self, event_id: str) -> None:
        await self.store.delete(Collections.PAYMENT_EVENTS, [eq("event_id", event_id)])
