"""
Staff account domain events.
"""

from dataclasses import dataclass

from core.domain.events import DomainEvent


@dataclass(frozen=True)
class StaffMemberCreated(DomainEvent):
    """Event raised when a staff account and its profile are provisioned."""

    profile_id: str
    email: str
    role: str
    created_by: str

    @property
    def aggregate_id(self) -> str:
        return self.profile_id


@dataclass(frozen=True)
class StaffMemberUpdated(DomainEvent):
    """Event raised when a staff profile is edited."""

    profile_id: str
    role: str
    updated_by: str

    @property
    def aggregate_id(self) -> str:
        return self.profile_id


@dataclass(frozen=True)
class StaffMemberDeleted(DomainEvent):
    """Event raised when a staff profile is removed."""

    profile_id: str
    deleted_by: str

    @property
    def aggregate_id(self) -> str:
        return self.profile_id
