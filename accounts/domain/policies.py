"""
Role policy domain service.

Pure decisions about which staff role may act on which. No I/O. The
role set is closed: only ``UserRole`` members are valid input.
"""
from typing import Iterable, Optional, Tuple

from accounts.domain.identity import ResolvedIdentity
from core.domain.value_objects import IdentityKind, UserRole

_CREATABLE_ROLES = {
    UserRole.SUPER_ADMIN: (UserRole.SUPER_ADMIN, UserRole.ADMIN, UserRole.STAFF),
    UserRole.ADMIN: (UserRole.STAFF,),
    UserRole.STAFF: (),
}


class RolePolicy:
    """Domain service for role-based authorization."""

    @staticmethod
    def is_staff(identity: Optional[ResolvedIdentity]) -> bool:
        """True for an identity resolved to an active staff profile."""
        return (
            identity is not None
            and identity.kind is IdentityKind.STAFF
            and identity.profile is not None
            and identity.profile.is_active
        )

    @staticmethod
    def is_admin(identity: Optional[ResolvedIdentity]) -> bool:
        """True for active staff with the admin or super admin role."""
        return RolePolicy.is_staff(identity) and identity.profile.role in (
            UserRole.ADMIN,
            UserRole.SUPER_ADMIN,
        )

    @staticmethod
    def is_super_admin(identity: Optional[ResolvedIdentity]) -> bool:
        """True for active staff with the super admin role."""
        return RolePolicy.is_staff(identity) and identity.profile.role is UserRole.SUPER_ADMIN

    @staticmethod
    def is_customer(identity: Optional[ResolvedIdentity]) -> bool:
        """True for an identity resolved to an active customer."""
        return (
            identity is not None
            and identity.kind is IdentityKind.CUSTOMER
            and identity.customer is not None
            and identity.customer.is_active
        )

    @staticmethod
    def has_role(identity: Optional[ResolvedIdentity], roles: Iterable[UserRole]) -> bool:
        """True for active staff holding one of ``roles``."""
        return RolePolicy.is_staff(identity) and identity.profile.role in tuple(roles)

    @staticmethod
    def is_read_only(identity: Optional[ResolvedIdentity]) -> bool:
        """Plain staff may look but not change staff accounts."""
        return RolePolicy.is_staff(identity) and identity.profile.role is UserRole.STAFF

    @staticmethod
    def creatable_roles(current: UserRole) -> Tuple[UserRole, ...]:
        """
        Roles a staff member of role ``current`` may create.

        Args:
            current: Acting role

        Returns:
            Tuple of creatable roles, most privileged first
        """
        return _CREATABLE_ROLES[current]

    @staticmethod
    def can_edit(current: UserRole, target: UserRole) -> bool:
        """Super admins edit anyone; admins edit staff; staff edit no one."""
        if current is UserRole.SUPER_ADMIN:
            return True
        if current is UserRole.ADMIN:
            return target is UserRole.STAFF
        return False

    @staticmethod
    def can_delete(current: UserRole, target: UserRole) -> bool:
        """Super admins delete anyone but super admins; admins delete staff."""
        if current is UserRole.SUPER_ADMIN:
            return target is not UserRole.SUPER_ADMIN
        if current is UserRole.ADMIN:
            return target is UserRole.STAFF
        return False
