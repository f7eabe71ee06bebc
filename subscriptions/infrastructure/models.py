"""
Subscription model.
"""
import uuid

from django.db import models
from django.utils import timezone


class Subscription(models.Model):
    """
    A customer's purchase agreement for a product.

    ``status`` and ``payment_status`` are independent: a failed payment
    leaves a subscription pending.
    """

    SUBSCRIPTION_TYPE_CHOICES = [
        ("monthly", "Monthly"),
        ("annual", "Annual"),
        ("lifetime", "Lifetime"),
        ("trial", "Trial"),
    ]

    STATUS_CHOICES = [
        ("pending", "Pending"),
        ("active", "Active"),
        ("trial", "Trial"),
        ("cancelled", "Cancelled"),
        ("expired", "Expired"),
    ]

    PAYMENT_STATUS_CHOICES = [
        ("paid", "Paid"),
        ("pending", "Pending"),
        ("failed", "Failed"),
        ("refunded", "Refunded"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    customer = models.ForeignKey(
        "customers.Customer", on_delete=models.CASCADE, related_name="subscriptions"
    )
    product = models.ForeignKey(
        "products.Product", on_delete=models.PROTECT, related_name="subscriptions"
    )
    subscription_type = models.CharField(max_length=20, choices=SUBSCRIPTION_TYPE_CHOICES)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="pending")
    payment_status = models.CharField(
        max_length=20, choices=PAYMENT_STATUS_CHOICES, default="pending"
    )
    amount = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    currency = models.CharField(max_length=3, default="EUR")
    trial_ends_at = models.DateTimeField(null=True, blank=True)
    auto_renew = models.BooleanField(default=False)
    created_at = models.DateTimeField(default=timezone.now, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "subscriptions"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["customer", "status"]),
            models.Index(fields=["status", "trial_ends_at"]),
        ]

    def __str__(self):
        return f"{self.subscription_type} subscription {self.id} ({self.status})"
