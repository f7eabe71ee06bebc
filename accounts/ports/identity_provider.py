"""
Identity provider port (interface).

Account creation, lookup and credential checks are delegated to an
external identity provider; password hashing never happens here.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from accounts.domain.identity import IdentityUser


class IdentityProvider(ABC):
    """Abstract identity provider."""

    @abstractmethod
    async def create_user(
        self,
        email: str,
        password: str,
        metadata: Dict[str, Any],
        email_confirm: bool = True,
    ) -> IdentityUser:
        """
        Create an account.

        Args:
            email: Account email
            password: Plain password, handed to the provider for hashing
            metadata: User metadata stored with the account
            email_confirm: Mark the email as confirmed

        Returns:
            The created account

        Raises:
            UserAlreadyExistsError: If an account already uses the email
            IdentityProviderError: For any other provider fault
        """
        pass

    @abstractmethod
    async def find_user_by_email(self, email: str) -> Optional[IdentityUser]:
        """
        Look an account up by email.

        Args:
            email: Account email

        Returns:
            The account or None
        """
        pass

    @abstractmethod
    async def get_user(self, subject_id: str) -> Optional[IdentityUser]:
        """
        Look an account up by subject id.

        Args:
            subject_id: Provider subject id

        Returns:
            The account or None
        """
        pass

    @abstractmethod
    async def authenticate(self, email: str, password: str) -> Optional[IdentityUser]:
        """
        Check credentials.

        Args:
            email: Account email
            password: Plain password

        Returns:
            The account when the credentials match, otherwise None
        """
        pass
