"""
StartCheckoutCommand.

Command to open a pending subscription for a product.
"""
import uuid
from dataclasses import dataclass
from typing import Optional

from accounts.domain.identity import ResolvedIdentity


@dataclass
class StartCheckoutCommand:
    """
    Command to start a checkout.

    This command creates:
    - A pending subscription carrying the product's price
    - An inactive license linked to it
    - A pending sale awaiting the payment provider
    """

    customer_id: uuid.UUID
    product_id: uuid.UUID
    requested_by: Optional[ResolvedIdentity] = None
    auto_renew: bool = False
