"""
Model registration for the subscriptions app.
"""
from subscriptions.infrastructure.models import Subscription  # noqa: F401
