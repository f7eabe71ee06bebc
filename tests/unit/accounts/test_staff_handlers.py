"""
Unit tests for staff management handlers.
"""
import pytest

from accounts.application.commands.staff_commands import (
    CreateStaffCommand,
    DeleteStaffCommand,
    UpdateStaffCommand,
)
from accounts.application.handlers.staff_handlers import (
    CreateStaffHandler,
    DeleteStaffHandler,
    ListStaffHandler,
    UpdateStaffHandler,
)
from accounts.application.queries.list_staff import ListStaffQuery
from accounts.domain.events import StaffMemberCreated
from accounts.domain.profile import Profile
from accounts.infrastructure.repositories.store_profile_repository import (
    StoreProfileRepository,
)
from core.domain.exceptions import (
    EmailAlreadyRegisteredError,
    PermissionDeniedError,
    ProfileNotFoundError,
    StoreError,
    ValidationError,
)
from core.domain.value_objects import UserRole
from core.infrastructure.memory_store import InMemoryRecordStore
from core.ports.record_store import Collections


class ProfileWriteFaultStore(InMemoryRecordStore):
    """Store refusing profile writes."""

    async def upsert(self, collection, values, on_conflict="id"):
        if collection == Collections.PROFILES:
            raise StoreError("profiles table is read-only")
        return await super().upsert(collection, values, on_conflict)


class RecordingHandler:
    def __init__(self):
        self.events = []

    async def handle(self, event):
        self.events.append(event)


def _command(requested_by=None, **overrides):
    values = {
        "email": "new.hire@backoffice.example.com",
        "password": "s3cret!",
        "full_name": "New Hire",
        "requested_by": requested_by,
    }
    values.update(overrides)
    return CreateStaffCommand(**values)


@pytest.mark.asyncio
class TestCreateStaffHandler:
    """Tests for CreateStaffHandler."""

    async def test_creates_account_and_profile(
        self, profile_repository, identity_provider, bus, super_admin
    ):
        recorder = RecordingHandler()
        bus.subscribe(StaffMemberCreated, recorder)
        handler = CreateStaffHandler(profile_repository, identity_provider, event_bus=bus)

        result = await handler.handle(_command(super_admin, role="admin"))

        assert result.success is True
        assert result.warning is None
        assert result.profile.role == "admin"
        saved = await profile_repository.find_by_id(result.user_id)
        assert saved.email == "new.hire@backoffice.example.com"
        assert recorder.events[0].created_by == super_admin.subject_id

    async def test_role_defaults_to_staff(self, profile_repository, identity_provider, bus, admin):
        handler = CreateStaffHandler(profile_repository, identity_provider, event_bus=bus)

        result = await handler.handle(_command(admin))

        assert result.profile.role == "staff"
        account = await identity_provider.get_user(result.user_id)
        assert account.metadata["user_type"] == "staff"

    async def test_missing_fields(self, profile_repository, identity_provider, bus):
        handler = CreateStaffHandler(profile_repository, identity_provider, event_bus=bus)

        with pytest.raises(ValidationError, match="Missing required fields"):
            await handler.handle(_command(full_name=""))

    async def test_short_password(self, profile_repository, identity_provider, bus):
        handler = CreateStaffHandler(profile_repository, identity_provider, event_bus=bus)

        with pytest.raises(ValidationError, match="at least 6 characters"):
            await handler.handle(_command(password="12345"))

    async def test_duplicate_email(self, profile_repository, identity_provider, bus):
        await profile_repository.save(
            Profile.create(
                subject_id="existing",
                email="new.hire@backoffice.example.com",
                full_name="Already Here",
            )
        )
        handler = CreateStaffHandler(profile_repository, identity_provider, event_bus=bus)

        with pytest.raises(EmailAlreadyRegisteredError):
            await handler.handle(_command())
        assert identity_provider.users == {}

    async def test_admin_cannot_create_admin(
        self, profile_repository, identity_provider, bus, admin
    ):
        handler = CreateStaffHandler(profile_repository, identity_provider, event_bus=bus)

        with pytest.raises(PermissionDeniedError):
            await handler.handle(_command(admin, role="admin"))

    async def test_staff_cannot_create_anyone(
        self, profile_repository, identity_provider, bus, staff_member
    ):
        handler = CreateStaffHandler(profile_repository, identity_provider, event_bus=bus)

        with pytest.raises(PermissionDeniedError):
            await handler.handle(_command(staff_member))

    async def test_unknown_role(self, profile_repository, identity_provider, bus):
        handler = CreateStaffHandler(profile_repository, identity_provider, event_bus=bus)

        with pytest.raises(ValidationError, match="Invalid role"):
            await handler.handle(_command(role="owner"))

    async def test_profile_write_failure_reports_warning(self, identity_provider, bus):
        handler = CreateStaffHandler(
            StoreProfileRepository(ProfileWriteFaultStore()), identity_provider, event_bus=bus
        )

        result = await handler.handle(_command())

        assert result.success is True
        assert result.profile is None
        assert result.warning.startswith("User created but profile could not be saved")
        assert result.user_id in identity_provider.users

    async def test_identity_fault_reuses_existing_account(
        self, profile_repository, failing_identity_provider, bus
    ):
        existing = failing_identity_provider.add("new.hire@backoffice.example.com")
        handler = CreateStaffHandler(profile_repository, failing_identity_provider, event_bus=bus)

        result = await handler.handle(_command())

        assert result.user_id == existing.subject_id
        assert await profile_repository.find_by_id(existing.subject_id) is not None

    async def test_identity_fault_without_account(
        self, profile_repository, failing_identity_provider, bus
    ):
        handler = CreateStaffHandler(profile_repository, failing_identity_provider, event_bus=bus)

        with pytest.raises(ValidationError, match="Error creating user"):
            await handler.handle(_command())


async def _save_profile(profile_repository, role, email):
    return await profile_repository.save(
        Profile.create(subject_id=email, email=email, full_name=email, role=role)
    )


@pytest.mark.asyncio
class TestUpdateAndDeleteStaff:
    """Tests for UpdateStaffHandler and DeleteStaffHandler."""

    async def test_admin_updates_staff(self, profile_repository, bus, admin):
        target = await _save_profile(profile_repository, UserRole.STAFF, "s@example.com")
        handler = UpdateStaffHandler(profile_repository, event_bus=bus)

        result = await handler.handle(
            UpdateStaffCommand(profile_id=target.id, requested_by=admin, full_name="Renamed")
        )

        assert result.full_name == "Renamed"
        assert result.role == "staff"

    async def test_admin_cannot_promote_to_admin(self, profile_repository, bus, admin):
        target = await _save_profile(profile_repository, UserRole.STAFF, "s@example.com")
        handler = UpdateStaffHandler(profile_repository, event_bus=bus)

        with pytest.raises(PermissionDeniedError):
            await handler.handle(
                UpdateStaffCommand(profile_id=target.id, requested_by=admin, role="admin")
            )

    async def test_admin_cannot_edit_admin(self, profile_repository, bus, admin):
        target = await _save_profile(profile_repository, UserRole.ADMIN, "a@example.com")
        handler = UpdateStaffHandler(profile_repository, event_bus=bus)

        with pytest.raises(PermissionDeniedError):
            await handler.handle(
                UpdateStaffCommand(profile_id=target.id, requested_by=admin, is_active=False)
            )

    async def test_update_missing_profile(self, profile_repository, bus, super_admin):
        handler = UpdateStaffHandler(profile_repository, event_bus=bus)

        with pytest.raises(ProfileNotFoundError):
            await handler.handle(UpdateStaffCommand(profile_id="nobody", requested_by=super_admin))

    async def test_super_admin_deletes_admin(self, profile_repository, bus, super_admin):
        target = await _save_profile(profile_repository, UserRole.ADMIN, "a@example.com")
        handler = DeleteStaffHandler(profile_repository, event_bus=bus)

        await handler.handle(DeleteStaffCommand(profile_id=target.id, requested_by=super_admin))

        assert await profile_repository.find_by_id(target.id) is None

    async def test_super_admin_cannot_delete_super_admin(
        self, profile_repository, bus, super_admin
    ):
        target = await _save_profile(profile_repository, UserRole.SUPER_ADMIN, "root@example.com")
        handler = DeleteStaffHandler(profile_repository, event_bus=bus)

        with pytest.raises(PermissionDeniedError):
            await handler.handle(
                DeleteStaffCommand(profile_id=target.id, requested_by=super_admin)
            )
        assert await profile_repository.find_by_id(target.id) is not None

    async def test_customer_cannot_delete(self, profile_repository, bus, customer_identity):
        target = await _save_profile(profile_repository, UserRole.STAFF, "s@example.com")
        handler = DeleteStaffHandler(profile_repository, event_bus=bus)

        with pytest.raises(PermissionDeniedError):
            await handler.handle(
                DeleteStaffCommand(profile_id=target.id, requested_by=customer_identity)
            )

    async def test_list_staff(self, profile_repository, admin):
        await _save_profile(profile_repository, UserRole.STAFF, "s@example.com")
        await _save_profile(profile_repository, UserRole.ADMIN, "a@example.com")

        result = await ListStaffHandler(profile_repository).handle(
            ListStaffQuery(requested_by=admin)
        )

        assert {profile.email for profile in result.staff} == {"s@example.com", "a@example.com"}
        assert result.creatable_roles == ["staff"]

    async def test_list_staff_refuses_anonymous(self, profile_repository):
        with pytest.raises(PermissionDeniedError):
            await ListStaffHandler(profile_repository).handle(ListStaffQuery(requested_by=None))
