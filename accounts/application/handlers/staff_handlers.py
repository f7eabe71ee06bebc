"""
Staff management handlers.

Handles staff provisioning, profile edits, deletion and listing. Role
checks go through RolePolicy; every refusal is surfaced to the caller.
"""
import logging
from typing import Optional

from accounts.application.commands.staff_commands import (
    CreateStaffCommand,
    DeleteStaffCommand,
    UpdateStaffCommand,
)
from accounts.application.dto.staff_dto import CreateStaffResultDTO, ProfileDTO, StaffListDTO
from accounts.application.queries.list_staff import ListStaffQuery
from accounts.domain.events import StaffMemberCreated, StaffMemberDeleted, StaffMemberUpdated
from accounts.domain.identity import ResolvedIdentity
from accounts.domain.policies import RolePolicy
from accounts.domain.profile import Profile
from accounts.ports.identity_provider import IdentityProvider
from accounts.ports.profile_repository import ProfileRepository
from core.domain.events import EventBus
from core.domain.exceptions import (
    EmailAlreadyRegisteredError,
    IdentityProviderError,
    PermissionDeniedError,
    ProfileNotFoundError,
    StoreError,
    ValidationError,
)
from core.domain.value_objects import Email, UserRole
from core.infrastructure.events import event_bus as default_event_bus

logger = logging.getLogger(__name__)


def parse_role(value: Optional[str], default: Optional[UserRole] = None) -> Optional[UserRole]:
    """
    Parse a role name.

    Raises:
        ValidationError: If the name is not a known role
    """
    if not value:
        return default
    try:
        return UserRole(value)
    except ValueError:
        raise ValidationError(f"Invalid role: {value}") from None


def require_staff(identity: Optional[ResolvedIdentity]) -> Profile:
    """Return the acting staff profile or refuse."""
    if not RolePolicy.is_staff(identity):
        raise PermissionDeniedError("Not authorized - staff only")
    return identity.profile


class CreateStaffHandler:
    """Handler for CreateStaffCommand."""

    def __init__(
        self,
        profile_repository: ProfileRepository,
        identity_provider: IdentityProvider,
        min_password_length: int = 6,
        event_bus: Optional[EventBus] = None,
    ):
        """Initialize handler with repositories."""
        self.profile_repository = profile_repository
        self.identity_provider = identity_provider
        self.min_password_length = min_password_length
        self.event_bus = event_bus or default_event_bus

    def _validate(self, command: CreateStaffCommand) -> UserRole:
        if not command.email or not command.password or not command.full_name:
            raise ValidationError("Missing required fields: email, password, fullName")
        if len(command.password) < self.min_password_length:
            raise ValidationError(
                f"Password must be at least {self.min_password_length} characters"
            )
        try:
            Email(command.email.strip())
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc
        return parse_role(command.role, default=UserRole.STAFF)

    async def handle(self, command: CreateStaffCommand) -> CreateStaffResultDTO:
        """
        Handle create staff command.

        Args:
            command: CreateStaffCommand

        Returns:
            CreateStaffResultDTO; carries a warning when the profile write failed

        Raises:
            ValidationError: If fields are missing or invalid
            PermissionDeniedError: If the requester may not create the role
            EmailAlreadyRegisteredError: If a profile already uses the email
        """
        role = self._validate(command)
        email = command.email.strip().lower()

        created_by = "system"
        if command.requested_by is not None:
            requester = require_staff(command.requested_by)
            if role not in RolePolicy.creatable_roles(requester.role):
                raise PermissionDeniedError(
                    f"A {requester.role.label} cannot create {role.label} accounts"
                )
            created_by = requester.id

        if await self.profile_repository.find_by_email(email) is not None:
            raise EmailAlreadyRegisteredError("A user with this email already exists")

        metadata = {"full_name": command.full_name, "user_type": "staff", "role": role.value}
        try:
            user = await self.identity_provider.create_user(
                email=email, password=command.password, metadata=metadata, email_confirm=True
            )
        except IdentityProviderError as exc:
            # The account may exist without a profile from an earlier partial run.
            user = await self.identity_provider.find_user_by_email(email)
            if user is None:
                raise ValidationError(f"Error creating user: {exc.message}") from exc
            logger.info("Reusing existing identity account", extra={"subject_id": user.subject_id})

        profile = Profile.create(
            subject_id=user.subject_id,
            email=email,
            full_name=command.full_name,
            role=role,
            phone=command.phone,
        )
        try:
            saved = await self.profile_repository.save(profile)
        except StoreError as exc:
            logger.error(
                "Staff profile could not be saved",
                extra={"subject_id": user.subject_id, "error": str(exc)},
            )
            return CreateStaffResultDTO(
                success=True,
                user_id=user.subject_id,
                warning=f"User created but profile could not be saved: {exc.message}",
            )

        await self.event_bus.publish(
            StaffMemberCreated(
                profile_id=saved.id,
                email=saved.email,
                role=saved.role.value,
                created_by=created_by,
            )
        )
        logger.info("Staff member created", extra={"profile_id": saved.id, "role": saved.role.value})
        return CreateStaffResultDTO(
            success=True, user_id=user.subject_id, profile=ProfileDTO.from_entity(saved)
        )


class UpdateStaffHandler:
    """Handler for UpdateStaffCommand."""

    def __init__(self, profile_repository: ProfileRepository, event_bus: Optional[EventBus] = None):
        """Initialize handler with repositories."""
        self.profile_repository = profile_repository
        self.event_bus = event_bus or default_event_bus

    async def handle(self, command: UpdateStaffCommand) -> ProfileDTO:
        """
        Handle update staff command.

        Raises:
            PermissionDeniedError: If the requester may not edit the target,
                or may not grant the new role
            ProfileNotFoundError: If the profile doesn't exist
        """
        requester = require_staff(command.requested_by)
        target = await self.profile_repository.find_by_id(command.profile_id)
        if target is None:
            raise ProfileNotFoundError(f"Staff profile {command.profile_id} not found")

        if not RolePolicy.can_edit(requester.role, target.role):
            raise PermissionDeniedError(
                f"A {requester.role.label} cannot edit {target.role.label} accounts"
            )

        new_role = parse_role(command.role)
        if new_role is not None and new_role is not target.role:
            if new_role not in RolePolicy.creatable_roles(requester.role):
                raise PermissionDeniedError(
                    f"A {requester.role.label} cannot grant the {new_role.label} role"
                )

        updated = target.update(
            full_name=command.full_name,
            phone=command.phone,
            role=new_role,
            is_active=command.is_active,
        )
        saved = await self.profile_repository.save(updated)
        await self.event_bus.publish(
            StaffMemberUpdated(profile_id=saved.id, role=saved.role.value, updated_by=requester.id)
        )
        return ProfileDTO.from_entity(saved)


class DeleteStaffHandler:
    """Handler for DeleteStaffCommand."""

    def __init__(self, profile_repository: ProfileRepository, event_bus: Optional[EventBus] = None):
        """Initialize handler with repositories."""
        self.profile_repository = profile_repository
        self.event_bus = event_bus or default_event_bus

    async def handle(self, command: DeleteStaffCommand) -> None:
        """
        Handle delete staff command.

        Only the profile is removed; the identity account stays.

        Raises:
            PermissionDeniedError: If the requester may not delete the target
            ProfileNotFoundError: If the profile doesn't exist
        """
        requester = require_staff(command.requested_by)
        target = await self.profile_repository.find_by_id(command.profile_id)
        if target is None:
            raise ProfileNotFoundError(f"Staff profile {command.profile_id} not found")

        if not RolePolicy.can_delete(requester.role, target.role):
            raise PermissionDeniedError(
                f"A {requester.role.label} cannot delete {target.role.label} accounts"
            )

        await self.profile_repository.delete(target.id)
        await self.event_bus.publish(
            StaffMemberDeleted(profile_id=target.id, deleted_by=requester.id)
        )


class ListStaffHandler:
    """Handler for ListStaffQuery."""

    def __init__(self, profile_repository: ProfileRepository):
        """Initialize handler with repositories."""
        self.profile_repository = profile_repository

    async def handle(self, query: ListStaffQuery) -> StaffListDTO:
        """List staff profiles plus the roles the requester may create."""
        requester = require_staff(query.requested_by)
        profiles = await self.profile_repository.list_all()
        return StaffListDTO(
            staff=[ProfileDTO.from_entity(profile) for profile in profiles],
            creatable_roles=[role.value for role in RolePolicy.creatable_roles(requester.role)],
        )
