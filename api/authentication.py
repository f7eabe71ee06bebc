"""
Request identity helpers for API views.
"""

from rest_framework.request import Request

from accounts.domain.identity import ResolvedIdentity
from core.domain.exceptions import AuthenticationRequiredError


def require_identity(request: Request) -> ResolvedIdentity:
    """
    Return the identity attached by ``IdentityMiddleware``.

    Raises:
        AuthenticationRequiredError: If the request has no signed-in identity
    """
    identity = getattr(request, "identity", None)
    if identity is None:
        raise AuthenticationRequiredError("Authentication required")
    return identity
