"""
Record-store implementation of LicenseRepository port.

This adapter converts between domain entities and store rows.
"""
import uuid
from typing import Optional

from core.domain.value_objects import LicenseStatus
from core.ports.record_store import Collections, RecordStore, Row, eq
from licenses.domain.license import License
from licenses.ports.license_repository import LicenseRepository


class StoreLicenseRepository(LicenseRepository):
    """
    RecordStore implementation of LicenseRepository.

    This adapter:
    1. Converts store rows to domain entities
    2. Converts domain entities to store rows
    3. Implements repository interface
    """

    def __init__(self, store: RecordStore):
        """Initialize repository with the record store."""
        self.store = store

    def _to_domain(self, row: Row) -> License:
        """
        Convert a store row to a domain entity.

        Args:
            row: License row

        Returns:
            License domain entity
        """
        return License(
            id=row["id"],
            subscription_id=row.get("subscription_id"),
            customer_id=row.get("customer_id"),
            product_id=row.get("product_id"),
            license_key=row["license_key"],
            status=LicenseStatus(row["status"]),
            max_activations=row.get("max_activations") or 1,
            current_activations=row.get("current_activations") or 0,
            expiration_date=row.get("expiration_date"),
            activated_at=row.get("activated_at"),
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at") or row.get("created_at"),
        )

    def _to_row(self, license: License) -> Row:
        """
        Convert a domain entity to a store row.

        Args:
            license: License domain entity

        Returns:
            License row
        """
        return {
            "id": license.id,
            "subscription_id": license.subscription_id,
            "customer_id": license.customer_id,
            "product_id": license.product_id,
            "license_key": license.license_key,
            "status": license.status.value,
            "max_activations": license.max_activations,
            "current_activations": license.current_activations,
            "expiration_date": license.expiration_date,
            "activated_at": license.activated_at,
            "created_at": license.created_at,
            "updated_at": license.updated_at,
        }

    async def _find_one(self, *filters) -> Optional[License]:
        rows = await self.store.select(Collections.LICENSES, filters, limit=1)
        return self._to_domain(rows[0]) if rows else None

    async def save(self, license: License) -> License:
        row = await self.store.upsert(Collections.LICENSES, self._to_row(license))
        return self._to_domain(row)

    async def find_by_id(self, license_id: uuid.UUID) -> Optional[License]:
        return await self._find_one(eq("id", license_id))

    async def find_by_key(self, license_key: str) -> Optional[License]:
        return await self._find_one(eq("license_key", license_key.strip().upper()))

    async def find_inactive_for_subscription(
        self, subscription_id: uuid.UUID
    ) -> Optional[License]:
        return await self._find_one(
            eq("subscription_id", subscription_id),
            eq("status", LicenseStatus.INACTIVE.value),
        )
