"""
Django admin configuration for payments app.
"""
from django.contrib import admin

from payments.infrastructure.models import ProcessedPaymentEvent


@admin.register(ProcessedPaymentEvent)
class ProcessedPaymentEventAdmin(admin.ModelAdmin):
    """Admin interface for the processed event ledger."""

    list_display = ["event_id", "event_type", "created_at"]
    list_filter = ["event_type", "created_at"]
    search_fields = ["event_id"]
    readonly_fields = ["id", "event_id", "event_type", "created_at"]
