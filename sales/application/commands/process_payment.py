"""
ProcessPaymentCommand.

Command for the atomic process-payment fast path.
"""
from dataclasses import dataclass
from typing import Optional

from accounts.domain.identity import ResolvedIdentity


@dataclass
class ProcessPaymentCommand:
    """
    Command to record a completed payment in one store-side transaction.

    The store finds or creates the customer, then writes an active paid
    subscription, an active license and a paid sale.
    """

    customer_email: str
    product_sku: str
    customer_name: Optional[str] = None
    payment_reference: Optional[str] = None
    requested_by: Optional[ResolvedIdentity] = None
