"""
Record-store implementation of CustomerRepository port.

This adapter converts between domain entities and store rows.
"""
import logging
import uuid
from typing import Optional

from core.domain.exceptions import StoreError
from core.ports.record_store import Collections, RecordStore, Row, eq
from customers.domain.customer import Customer
from customers.ports.customer_repository import CustomerRepository

logger = logging.getLogger(__name__)


class StoreCustomerRepository(CustomerRepository):
    """
    RecordStore implementation of CustomerRepository.

    This adapter:
    1. Converts store rows to domain entities
    2. Converts domain entities to store rows
    3. Implements repository interface
    """

    def __init__(self, store: RecordStore):
        """Initialize repository with the record store."""
        self.store = store

    def _to_domain(self, row: Row) -> Customer:
        """
        Convert a store row to a domain entity.

        Args:
            row: Customer row

        Returns:
            Customer domain entity
        """
        return Customer(
            id=row["id"],
            email=row["email"],
            full_name=row.get("full_name") or "",
            company=row.get("company"),
            phone=row.get("phone"),
            is_active=bool(row.get("is_active", True)),
            auth_user_id=row.get("auth_user_id"),
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at") or row.get("created_at"),
        )

    def _to_row(self, customer: Customer) -> Row:
        """
        Convert a domain entity to a store row.

        Args:
            customer: Customer domain entity

        Returns:
            Customer row
        """
        row = {
            "id": customer.id,
            "email": customer.email,
            "full_name": customer.full_name,
            "company": customer.company,
            "phone": customer.phone,
            "is_active": customer.is_active,
            "created_at": customer.created_at,
            "updated_at": customer.updated_at,
        }
        if customer.auth_user_id:
            row["auth_user_id"] = customer.auth_user_id
        return row

    async def _find_one(self, *filters) -> Optional[Customer]:
        rows = await self.store.select(Collections.CUSTOMERS, filters, limit=1)
        return self._to_domain(rows[0]) if rows else None

    async def save(self, customer: Customer) -> Customer:
        row = await self.store.upsert(Collections.CUSTOMERS, self._to_row(customer))
        return self._to_domain(row)

    async def find_by_id(self, customer_id: uuid.UUID) -> Optional[Customer]:
        return await self._find_one(eq("id", customer_id))

    async def find_by_email(self, email: str) -> Optional[Customer]:
        return await self._find_one(eq("email", email.strip().lower()))

    async def find_by_auth_user_id(self, auth_user_id: str) -> Optional[Customer]:
        try:
            return await self._find_one(eq("auth_user_id", auth_user_id))
        except StoreError as exc:
            logger.warning(
                "Customer lookup by identity link failed, treating as not found",
                extra={"auth_user_id": auth_user_id, "error": str(exc)},
            )
            return None
