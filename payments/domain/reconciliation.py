"""
Reconciliation results.
"""
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class ReconciliationOutcome(Enum):
    """What a reconciliation run did with an event."""

    SUBSCRIPTION_ACTIVATED = "subscription_activated"
    PAYMENT_FAILURE_RECORDED = "payment_failure_recorded"
    MISSING_EMAIL = "missing_email"
    CUSTOMER_NOT_FOUND = "customer_not_found"
    NO_PENDING_SUBSCRIPTION = "no_pending_subscription"
    DUPLICATE_EVENT = "duplicate_event"
    IGNORED = "ignored"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ReconciliationResult:
    """
    Outcome of one reconciliation run.

    Business misses are outcomes, not errors: the provider is always
    acknowledged once the event parsed.
    """

    event_type: str
    outcome: ReconciliationOutcome
    customer_id: Optional[uuid.UUID] = None
    subscription_id: Optional[uuid.UUID] = None
    license_id: Optional[uuid.UUID] = None
    sale_id: Optional[uuid.UUID] = None
    failed_subscription_ids: List[uuid.UUID] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
