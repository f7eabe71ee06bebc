"""
Profile repository port (interface).

This defines the contract for staff profile persistence operations.
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from accounts.domain.profile import Profile


class ProfileRepository(ABC):
    """
    Abstract repository for Profile entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    async def save(self, profile: Profile) -> Profile:
        """
        Insert or overwrite a profile, keyed by its id.

        Args:
            profile: Profile entity to save

        Returns:
            Saved profile entity
        """
        pass

    @abstractmethod
    async def find_by_id(self, profile_id: str) -> Optional[Profile]:
        """
        Find a profile by its subject id.

        Args:
            profile_id: Identity-provider subject id

        Returns:
            Profile entity or None if not found
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[Profile]:
        """
        Find a profile by email.

        Args:
            email: Staff email address

        Returns:
            Profile entity or None if not found
        """
        pass

    @abstractmethod
    async def list_all(self) -> List[Profile]:
        """
        List every staff profile, newest first.

        Returns:
            List of Profile entities
        """
        pass

    @abstractmethod
    async def delete(self, profile_id: str) -> bool:
        """
        Delete a profile.

        Args:
            profile_id: Identity-provider subject id

        Returns:
            True if a profile was deleted
        """
        pass
