"""
Django admin configuration for customers app.
"""
from django.contrib import admin

from customers.infrastructure.models import Customer


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    """Admin interface for Customer model."""

    list_display = ["email", "full_name", "company", "is_active", "created_at"]
    list_filter = ["is_active", "created_at"]
    search_fields = ["email", "full_name", "company"]
    readonly_fields = ["id", "auth_user_id", "created_at", "updated_at"]
