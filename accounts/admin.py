"""
Django admin configuration for accounts app.
"""
from django.contrib import admin

from accounts.infrastructure.models import Profile, UserMetadata


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    """Admin interface for Profile model."""

    list_display = ["email", "full_name", "role", "is_active", "created_at"]
    list_filter = ["role", "is_active"]
    search_fields = ["email", "full_name"]
    readonly_fields = ["id", "created_at", "updated_at"]


@admin.register(UserMetadata)
class UserMetadataAdmin(admin.ModelAdmin):
    """Admin interface for identity account metadata."""

    list_display = ["user_id", "updated_at"]
    search_fields = ["user_id"]
    readonly_fields = ["created_at", "updated_at"]
