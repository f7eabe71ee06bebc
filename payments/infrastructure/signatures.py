"""
Webhook signature verification.

The provider signs each delivery with a ``Stripe-Signature`` header of
the form ``t=<unix time>,v1=<hex hmac>[,v1=...]``; the HMAC-SHA256 is
computed over ``"<t>.<raw body>"`` with the endpoint secret.
"""
import hashlib
import hmac
import time
from typing import Dict, List, Optional, Union

from core.domain.exceptions import InvalidSignatureError

SIGNATURE_SCHEME = "v1"


def _parse_header(header: str) -> Dict[str, List[str]]:
    parts: Dict[str, List[str]] = {}
    for item in header.split(","):
        key, sep, value = item.strip().partition("=")
        if sep:
            parts.setdefault(key, []).append(value)
    return parts


def compute_signature(secret: str, timestamp: Union[int, str], body: bytes) -> str:
    """Return the hex HMAC-SHA256 of ``"<timestamp>.<body>"``."""
    signed_payload = f"{timestamp}.".encode("utf-8") + body
    return hmac.new(secret.encode("utf-8"), signed_payload, hashlib.sha256).hexdigest()


def verify_signature(
    body: bytes,
    header: Optional[str],
    secret: str,
    tolerance: int = 300,
    now: Optional[float] = None,
) -> int:
    """
    Verify a signed webhook delivery.

    Args:
        body: Raw request body
        header: ``Stripe-Signature`` header value
        secret: Endpoint signing secret
        tolerance: Maximum age of the signature timestamp, in seconds
        now: Current unix time (defaults to ``time.time()``)

    Returns:
        The verified signature timestamp

    Raises:
        InvalidSignatureError: If the header is missing, malformed, stale
            or carries no matching signature
    """
    if not header:
        raise InvalidSignatureError("Missing signature header")

    parts = _parse_header(header)
    try:
        timestamp = int(parts["t"][0])
    except (KeyError, IndexError, ValueError):
        raise InvalidSignatureError("Malformed signature header") from None

    candidates = parts.get(SIGNATURE_SCHEME, [])
    if not candidates:
        raise InvalidSignatureError("No v1 signature in header")

    current = time.time() if now is None else now
    if tolerance and abs(current - timestamp) > tolerance:
        raise InvalidSignatureError("Signature timestamp outside the tolerance window")

    expected = compute_signature(secret, timestamp, body)
    if not any(hmac.compare_digest(expected, candidate) for candidate in candidates):
        raise InvalidSignatureError("Signature does not match payload")
    return timestamp
