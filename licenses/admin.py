"""
Django admin configuration for licenses app.
"""
from django.contrib import admin
from django.utils.html import format_html

from licenses.infrastructure.models import License


@admin.register(License)
class LicenseAdmin(admin.ModelAdmin):
    """Admin interface for License model."""

    list_display = [
        "license_key",
        "product",
        "status_display",
        "current_activations",
        "max_activations",
        "seats_remaining",
        "expiration_date",
        "created_at",
    ]
    list_filter = ["status", "expiration_date", "created_at"]
    search_fields = ["license_key", "customer__email", "product__name"]
    readonly_fields = ["id", "license_key", "activated_at", "created_at", "updated_at"]
    raw_id_fields = ["subscription", "customer", "product"]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": ("id", "license_key", "subscription", "customer", "product", "status"),
            },
        ),
        (
            "Activations",
            {
                "fields": ("max_activations", "current_activations", "activated_at"),
            },
        ),
        (
            "Expiration",
            {
                "fields": ("expiration_date",),
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

    def status_display(self, obj):
        """Display status with color coding."""
        colors = {
            "active": "green",
            "inactive": "orange",
            "revoked": "red",
            "expired": "gray",
        }
        return format_html(
            '<span style="color: {}; font-weight: bold;">{}</span>',
            colors.get(obj.status, "black"),
            obj.status.upper(),
        )

    status_display.short_description = "Status"

    def seats_remaining(self, obj):
        """Display remaining seats."""
        remaining = max(0, obj.max_activations - obj.current_activations)
        if remaining == 0:
            return format_html('<span style="color: red;">{}</span>', remaining)
        return remaining

    seats_remaining.short_description = "Seats Remaining"
