"""
Prometheus metrics for the back office.

HTTP metrics are recorded by the observability middleware; business
counters are fed from domain events by ``MetricsEventHandler``.
"""

from prometheus_client import Counter, Histogram

# HTTP metrics
http_requests_total = Counter(
    "backoffice_http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

http_request_duration_seconds = Histogram(
    "backoffice_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.0, 5.0, 10.0],
)

# Payment provider events
payment_events_total = Counter(
    "payment_events_total",
    "Payment provider events received",
    ["event_type", "outcome"],
)

# Subscription metrics
checkouts_started_total = Counter(
    "checkouts_started_total",
    "Checkouts started",
    ["subscription_type"],
)

subscriptions_activated_total = Counter(
    "subscriptions_activated_total",
    "Subscriptions activated by a confirmed payment",
)

subscription_payment_failures_total = Counter(
    "subscription_payment_failures_total",
    "Pending subscriptions marked as failed payment",
)

# License metrics
licenses_activated_total = Counter(
    "licenses_activated_total",
    "Licenses activated by a confirmed payment",
)

license_seat_activations_total = Counter(
    "license_seat_activations_total",
    "Seat activations recorded against licenses",
)

licenses_revoked_total = Counter(
    "licenses_revoked_total",
    "Licenses revoked by staff",
)

# Sales
sales_recorded_total = Counter(
    "sales_recorded_total",
    "Paid sales recorded by reconciliation",
    ["currency", "mode"],
)

# Identity
customers_provisioned_total = Counter(
    "customers_provisioned_total",
    "Customer records created",
    ["source"],
)

staff_members_created_total = Counter(
    "staff_members_created_total",
    "Staff accounts provisioned",
    ["role"],
)

# Error metrics
errors_total = Counter(
    "backoffice_errors_total",
    "Total errors",
    ["error_type", "endpoint"],
)
