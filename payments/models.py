"""
Model registration for the payments app.
"""
from payments.infrastructure.models import ProcessedPaymentEvent  # noqa: F401
