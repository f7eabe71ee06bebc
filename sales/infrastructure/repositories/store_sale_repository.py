"""
Record-store implementation of SaleRepository port.
"""
import uuid
from decimal import Decimal
from typing import List, Optional

from core.domain.value_objects import PaymentStatus
from core.ports.record_store import Collections, Ordering, RecordStore, Row, eq
from sales.domain.sale import Sale
from sales.ports.sale_repository import SaleRepository


class StoreSaleRepository(SaleRepository):
    """RecordStore implementation of SaleRepository."""

    def __init__(self, store: RecordStore):
        """Initialize repository with the record store."""
        self.store = store

    def _to_domain(self, row: Row) -> Sale:
        return Sale(
            id=row["id"],
            subscription_id=row.get("subscription_id"),
            customer_id=row.get("customer_id"),
            product_id=row.get("product_id"),
            amount=Decimal(str(row.get("amount") or 0)),
            currency=(row.get("currency") or "EUR").upper(),
            payment_status=PaymentStatus(row["payment_status"]),
            payment_method=row.get("payment_method"),
            payment_reference=row.get("payment_reference"),
            sale_date=row.get("sale_date"),
            notes=row.get("notes"),
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at") or row.get("created_at"),
        )

    def _to_row(self, sale: Sale) -> Row:
        return {
            "id": sale.id,
            "subscription_id": sale.subscription_id,
            "customer_id": sale.customer_id,
            "product_id": sale.product_id,
            "amount": sale.amount,
            "currency": sale.currency,
            "payment_status": sale.payment_status.value,
            "payment_method": sale.payment_method,
            "payment_reference": sale.payment_reference,
            "sale_date": sale.sale_date,
            "notes": sale.notes,
            "created_at": sale.created_at,
            "updated_at": sale.updated_at,
        }

    async def save(self, sale: Sale) -> Sale:
        row = await self.store.upsert(Collections.SALES, self._to_row(sale))
        return self._to_domain(row)

    async def find_pending_for_subscription(self, subscription_id: uuid.UUID) -> Optional[Sale]:
        rows = await self.store.select(
            Collections.SALES,
            [
                eq("subscription_id", subscription_id),
                eq("payment_status", PaymentStatus.PENDING.value),
            ],
            limit=1,
        )
        return self._to_domain(rows[0]) if rows else None

    async def list_for_subscription(self, subscription_id: uuid.UUID) -> List[Sale]:
        rows = await self.store.select(
            Collections.SALES,
            [eq("subscription_id", subscription_id)],
            order_by=[Ordering("created_at")],
        )
        return [self._to_domain(row) for row in rows]
