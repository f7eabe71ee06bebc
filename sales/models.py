"""
Model registration for the sales app.
"""
from sales.infrastructure.models import Sale  # noqa: F401
