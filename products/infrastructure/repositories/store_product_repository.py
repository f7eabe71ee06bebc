"""
Record-store implementation of ProductRepository port.
"""
import uuid
from decimal import Decimal
from typing import Optional

from core.domain.value_objects import SubscriptionType
from core.ports.record_store import Collections, RecordStore, Row, eq
from products.domain.product import Product
from products.ports.product_repository import ProductRepository


class StoreProductRepository(ProductRepository):
    """RecordStore implementation of ProductRepository."""

    def __init__(self, store: RecordStore):
        """Initialize repository with the record store."""
        self.store = store

    def _to_domain(self, row: Row) -> Product:
        return Product(
            id=row["id"],
            sku=row["sku"],
            name=row.get("name") or row["sku"],
            price=Decimal(str(row.get("price") or 0)),
            currency=(row.get("currency") or "EUR").upper(),
            subscription_type=SubscriptionType(row.get("subscription_type") or "monthly"),
            trial_days=row.get("trial_days"),
            max_activations=row.get("max_activations") or 1,
            is_active=bool(row.get("is_active", True)),
            created_at=row.get("created_at"),
        )

    async def _find_one(self, *filters) -> Optional[Product]:
        rows = await self.store.select(Collections.PRODUCTS, filters, limit=1)
        return self._to_domain(rows[0]) if rows else None

    async def find_by_id(self, product_id: uuid.UUID) -> Optional[Product]:
        return await self._find_one(eq("id", product_id))

    async def find_by_sku(self, sku: str) -> Optional[Product]:
        return await self._find_one(eq("sku", sku))
