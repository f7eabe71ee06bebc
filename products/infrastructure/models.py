"""
Product model.
"""
import uuid

from django.db import models


class Product(models.Model):
    """
    Represents a product that can be sold and licensed.
    """

    SUBSCRIPTION_TYPE_CHOICES = [
        ("monthly", "Monthly"),
        ("annual", "Annual"),
        ("lifetime", "Lifetime"),
        ("trial", "Trial"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    sku = models.CharField(max_length=100, unique=True, db_index=True)
    name = models.CharField(max_length=255, help_text="Product display name")
    price = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    currency = models.CharField(max_length=3, default="EUR")
    subscription_type = models.CharField(
        max_length=20, choices=SUBSCRIPTION_TYPE_CHOICES, default="monthly"
    )
    trial_days = models.PositiveIntegerField(null=True, blank=True)
    max_activations = models.PositiveIntegerField(default=1)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "products"
        ordering = ["name"]

    def __str__(self):
        return f"{self.name} ({self.sku})"
