"""
Inbound payment provider events.

Provider payloads are parsed once, at the edge, into a closed set of
event variants. Anything not recognized becomes an
``UnhandledPaymentEvent`` that is acknowledged and ignored.
"""
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from core.domain.exceptions import InvalidPaymentEventError

SUCCESS_EVENT_TYPES = frozenset({"checkout.session.completed", "payment_intent.succeeded"})
FAILURE_EVENT_TYPES = frozenset({"payment_intent.payment_failed"})


@dataclass(frozen=True)
class PaymentSucceeded:
    """A confirmed payment."""

    event_type: str
    event_id: Optional[str]
    customer_email: Optional[str]
    amount_received: Optional[int]
    currency: Optional[str]
    payment_reference: Optional[str]


@dataclass(frozen=True)
class PaymentFailed:
    """A failed payment attempt."""

    event_type: str
    event_id: Optional[str]
    customer_email: Optional[str]
    payment_reference: Optional[str]


@dataclass(frozen=True)
class UnhandledPaymentEvent:
    """Any provider event type this service does not act on."""

    event_type: str
    event_id: Optional[str]


PaymentEvent = Union[PaymentSucceeded, PaymentFailed, UnhandledPaymentEvent]


def _text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _nested_email(data: Mapping[str, Any], key: str) -> Optional[str]:
    nested = data.get(key)
    if isinstance(nested, Mapping):
        return _text(nested.get("email"))
    return None


def _customer_email(data: Mapping[str, Any], include_customer_details: bool) -> Optional[str]:
    candidates = [
        _text(data.get("customer_email")),
        _text(data.get("receipt_email")),
        _nested_email(data, "billing_details"),
    ]
    if include_customer_details:
        candidates.append(_nested_email(data, "customer_details"))
    return next((email for email in candidates if email), None)


def _amount(value: Any) -> Optional[int]:
    # bool is an int subclass; a flag is never an amount
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return int(value)


def parse_payment_event(payload: Any) -> PaymentEvent:
    """
    Parse a decoded provider payload.

    Args:
        payload: JSON-decoded request body

    Returns:
        PaymentSucceeded, PaymentFailed or UnhandledPaymentEvent

    Raises:
        InvalidPaymentEventError: If the payload has no event type, or a
            recognized event carries no ``data.object``
    """
    if not isinstance(payload, Mapping):
        raise InvalidPaymentEventError("Event payload must be a JSON object")
    event_type = _text(payload.get("type"))
    if event_type is None:
        raise InvalidPaymentEventError("Event type is missing")
    event_id = _text(payload.get("id"))

    if event_type not in SUCCESS_EVENT_TYPES and event_type not in FAILURE_EVENT_TYPES:
        return UnhandledPaymentEvent(event_type=event_type, event_id=event_id)

    data = payload.get("data")
    obj = data.get("object") if isinstance(data, Mapping) else None
    if not isinstance(obj, Mapping):
        raise InvalidPaymentEventError(f"Event {event_type} has no data object")

    if event_type in SUCCESS_EVENT_TYPES:
        return PaymentSucceeded(
            event_type=event_type,
            event_id=event_id,
            customer_email=_customer_email(obj, include_customer_details=True),
            amount_received=_amount(obj.get("amount_received")),
            currency=_text(obj.get("currency")),
            payment_reference=_text(obj.get("payment_intent")) or _text(obj.get("id")),
        )
    return PaymentFailed(
        event_type=event_type,
        event_id=event_id,
        customer_email=_customer_email(obj, include_customer_details=False),
        payment_reference=_text(obj.get("id")),
    )
