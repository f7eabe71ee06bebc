"""
Django admin configuration for products app.
"""

from django.contrib import admin

from products.infrastructure.models import Product


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    """Admin interface for Product model."""

    list_display = ["name", "sku", "price", "currency", "subscription_type", "is_active"]
    list_filter = ["subscription_type", "is_active", "created_at"]
    search_fields = ["name", "sku"]
    readonly_fields = ["id", "created_at", "updated_at"]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": ("id", "sku", "name", "is_active"),
            },
        ),
        (
            "Pricing",
            {
                "fields": ("price", "currency", "subscription_type", "trial_days", "max_activations"),
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("created_at", "updated_at"),
                "classes": ("collapse",),
            },
        ),
    )
