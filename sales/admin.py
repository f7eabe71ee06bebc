"""
Django admin configuration for sales app.
"""
from django.contrib import admin

from sales.infrastructure.models import Sale


@admin.register(Sale)
class SaleAdmin(admin.ModelAdmin):
    """Admin interface for Sale model."""

    list_display = ["sale_date", "subscription", "amount", "currency", "payment_status"]
    list_filter = ["payment_status", "payment_method", "sale_date"]
    search_fields = ["payment_reference", "customer__email", "notes"]
    readonly_fields = ["id", "created_at", "updated_at"]
    raw_id_fields = ["subscription", "customer", "product"]
