"""
Record-store implementation of SubscriptionRepository port.

This adapter converts between domain entities and store rows.
"""
import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional

from core.domain.value_objects import PaymentStatus, SubscriptionStatus, SubscriptionType
from core.ports.record_store import Collections, Ordering, RecordStore, Row, eq, gte, lt
from subscriptions.domain.subscription import Subscription
from subscriptions.ports.subscription_repository import SubscriptionRepository


class StoreSubscriptionRepository(SubscriptionRepository):
    """
    RecordStore implementation of SubscriptionRepository.

    This adapter:
    1. Converts store rows to domain entities
    2. Converts domain entities to store rows
    3. Implements repository interface
    """

    def __init__(self, store: RecordStore):
        """Initialize repository with the record store."""
        self.store = store

    def _to_domain(self, row: Row) -> Subscription:
        """
        Convert a store row to a domain entity.

        Args:
            row: Subscription row

        Returns:
            Subscription domain entity
        """
        return Subscription(
            id=row["id"],
            customer_id=row["customer_id"],
            product_id=row["product_id"],
            subscription_type=SubscriptionType(row.get("subscription_type") or "monthly"),
            status=SubscriptionStatus(row["status"]),
            payment_status=PaymentStatus(row.get("payment_status") or "pending"),
            amount=Decimal(str(row.get("amount") or 0)),
            currency=(row.get("currency") or "EUR").upper(),
            trial_ends_at=row.get("trial_ends_at"),
            auto_renew=bool(row.get("auto_renew", False)),
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at") or row.get("created_at"),
        )

    def _to_row(self, subscription: Subscription) -> Row:
        """
        Convert a domain entity to a store row.

        Args:
            subscription: Subscription domain entity

        Returns:
            Subscription row
        """
        return {
            "id": subscription.id,
            "customer_id": subscription.customer_id,
            "product_id": subscription.product_id,
            "subscription_type": subscription.subscription_type.value,
            "status": subscription.status.value,
            "payment_status": subscription.payment_status.value,
            "amount": subscription.amount,
            "currency": subscription.currency,
            "trial_ends_at": subscription.trial_ends_at,
            "auto_renew": subscription.auto_renew,
            "created_at": subscription.created_at,
            "updated_at": subscription.updated_at,
        }

    async def save(self, subscription: Subscription) -> Subscription:
        row = await self.store.upsert(Collections.SUBSCRIPTIONS, self._to_row(subscription))
        return self._to_domain(row)

    async def find_by_id(self, subscription_id: uuid.UUID) -> Optional[Subscription]:
        rows = await self.store.select(
            Collections.SUBSCRIPTIONS, [eq("id", subscription_id)], limit=1
        )
        return self._to_domain(rows[0]) if rows else None

    async def find_latest_pending_for_customer(
        self, customer_id: uuid.UUID
    ) -> Optional[Subscription]:
        rows = await self.store.select(
            Collections.SUBSCRIPTIONS,
            [eq("customer_id", customer_id), eq("status", SubscriptionStatus.PENDING.value)],
            order_by=[Ordering("created_at", descending=True)],
            limit=1,
        )
        return self._to_domain(rows[0]) if rows else None

    async def mark_pending_payment_failed(self, customer_id: uuid.UUID) -> List[Subscription]:
        rows = await self.store.update(
            Collections.SUBSCRIPTIONS,
            {
                "payment_status": PaymentStatus.FAILED.value,
                "updated_at": datetime.now(timezone.utc),
            },
            [eq("customer_id", customer_id), eq("status", SubscriptionStatus.PENDING.value)],
        )
        return [self._to_domain(row) for row in rows]

    async def find_trials(self, expired: bool, now: datetime) -> List[Subscription]:
        boundary = lt("trial_ends_at", now) if expired else gte("trial_ends_at", now)
        rows = await self.store.select(
            Collections.SUBSCRIPTIONS,
            [eq("status", SubscriptionStatus.TRIAL.value), boundary],
            order_by=[Ordering("trial_ends_at", descending=expired)],
        )
        return [self._to_domain(row) for row in rows]
