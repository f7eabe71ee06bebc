"""
Django admin configuration for subscriptions app.
"""
from django.contrib import admin

from subscriptions.infrastructure.models import Subscription


@admin.register(Subscription)
class SubscriptionAdmin(admin.ModelAdmin):
    """Admin interface for Subscription model."""

    list_display = [
        "id",
        "customer",
        "product",
        "subscription_type",
        "status",
        "payment_status",
        "amount",
        "currency",
        "created_at",
    ]
    list_filter = ["status", "payment_status", "subscription_type", "created_at"]
    search_fields = ["customer__email", "product__sku", "product__name"]
    readonly_fields = ["id", "created_at", "updated_at"]
    raw_id_fields = ["customer", "product"]
