"""
Process-payment DTOs.
"""
import uuid
from dataclasses import dataclass


@dataclass
class ProcessedPaymentDTO:
    """DTO for the records written by the process-payment procedure."""

    customer_id: uuid.UUID
    subscription_id: uuid.UUID
    license_id: uuid.UUID
    license_key: str
    sale_id: uuid.UUID
