"""
Model registration for the accounts app.
"""
from accounts.infrastructure.models import Profile, UserMetadata  # noqa: F401
