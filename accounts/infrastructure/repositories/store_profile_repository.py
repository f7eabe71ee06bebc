"""
Record-store implementation of ProfileRepository port.
"""
from typing import List, Optional

from accounts.domain.profile import Profile
from accounts.ports.profile_repository import ProfileRepository
from core.domain.value_objects import UserRole
from core.ports.record_store import Collections, Ordering, RecordStore, Row, eq


class StoreProfileRepository(ProfileRepository):
    """
    RecordStore implementation of ProfileRepository.

    This adapter:
    1. Converts store rows to domain entities
    2. Converts domain entities to store rows
    3. Implements repository interface
    """

    def __init__(self, store: RecordStore):
        """Initialize repository with the record store."""
        self.store = store

    def _to_domain(self, row: Row) -> Profile:
        return Profile(
            id=str(row["id"]),
            email=row["email"],
            full_name=row.get("full_name") or "",
            phone=row.get("phone"),
            role=UserRole(row.get("role") or UserRole.STAFF.value),
            is_active=bool(row.get("is_active", True)),
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at") or row.get("created_at"),
        )

    def _to_row(self, profile: Profile) -> Row:
        return {
            "id": profile.id,
            "email": profile.email,
            "full_name": profile.full_name,
            "phone": profile.phone,
            "role": profile.role.value,
            "is_active": profile.is_active,
            "created_at": profile.created_at,
            "updated_at": profile.updated_at,
        }

    async def save(self, profile: Profile) -> Profile:
        row = await self.store.upsert(Collections.PROFILES, self._to_row(profile), on_conflict="id")
        return self._to_domain(row)

    async def find_by_id(self, profile_id: str) -> Optional[Profile]:
        rows = await self.store.select(Collections.PROFILES, [eq("id", profile_id)], limit=1)
        return self._to_domain(rows[0]) if rows else None

    async def find_by_email(self, email: str) -> Optional[Profile]:
        rows = await self.store.select(
            Collections.PROFILES, [eq("email", email.strip().lower())], limit=1
        )
        return self._to_domain(rows[0]) if rows else None

    async def list_all(self) -> List[Profile]:
        rows = await self.store.select(
            Collections.PROFILES, order_by=[Ordering("created_at", descending=True)]
        )
        return [self._to_domain(row) for row in rows]

    async def delete(self, profile_id: str) -> bool:
        deleted = await self.store.delete(Collections.PROFILES, [eq("id", profile_id)])
        return deleted > 0
