"""
License lifecycle handlers.

Handles revocation by staff and seat activation by products.
"""
import logging
from typing import Optional

from accounts.domain.policies import RolePolicy
from core.domain.events import EventBus
from core.domain.exceptions import LicenseNotFoundError, PermissionDeniedError
from core.infrastructure.events import event_bus as default_event_bus
from licenses.application.commands.license_commands import (
    ActivateSeatCommand,
    RevokeLicenseCommand,
)
from licenses.application.dto.license_dto import LicenseDTO
from licenses.domain.events import LicenseRevoked, LicenseSeatActivated
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


class RevokeLicenseHandler:
    """Handler for RevokeLicenseCommand."""

    def __init__(self, license_repository: LicenseRepository, event_bus: Optional[EventBus] = None):
        """Initialize handler with repositories."""
        self.license_repository = license_repository
        self.event_bus = event_bus or default_event_bus

    async def handle(self, command: RevokeLicenseCommand) -> LicenseDTO:
        """
        Handle revoke license command.

        Revocation is unconditional and terminal.

        Raises:
            PermissionDeniedError: If the requester is not staff
            LicenseNotFoundError: If license not found
        """
        if not RolePolicy.is_staff(command.requested_by):
            raise PermissionDeniedError("Not authorized - staff only")

        license = await self.license_repository.find_by_id(command.license_id)
        if license is None:
            raise LicenseNotFoundError(f"License {command.license_id} not found")

        revoked = await self.license_repository.save(license.revoke())
        await self.event_bus.publish(
            LicenseRevoked(license_id=revoked.id, previous_status=license.status.value)
        )
        logger.info(
            "License revoked",
            extra={"license_id": str(revoked.id), "revoked_by": command.requested_by.subject_id},
        )
        return LicenseDTO.from_entity(revoked)


class ActivateSeatHandler:
    """Handler for ActivateSeatCommand."""

    def __init__(self, license_repository: LicenseRepository, event_bus: Optional[EventBus] = None):
        """Initialize handler with repositories."""
        self.license_repository = license_repository
        self.event_bus = event_bus or default_event_bus

    async def handle(self, command: ActivateSeatCommand) -> LicenseDTO:
        """
        Handle activate seat command.

        Raises:
            LicenseNotFoundError: If no license has the key
            InvalidLicenseStatusError: If the license is not active or has expired
            SeatLimitExceededError: If every seat is taken
        """
        license = await self.license_repository.find_by_key(command.license_key)
        if license is None:
            raise LicenseNotFoundError("License key not found")

        activated = await self.license_repository.save(license.record_activation())
        await self.event_bus.publish(
            LicenseSeatActivated(
                license_id=activated.id,
                current_activations=activated.current_activations,
                max_activations=activated.max_activations,
            )
        )
        return LicenseDTO.from_entity(activated)
