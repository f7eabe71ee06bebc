"""
Profile and UserMetadata models.
"""
from django.db import models
from django.utils import timezone


class Profile(models.Model):
    """
    Staff profile. The primary key is the identity-provider subject id.
    """

    ROLE_CHOICES = [
        ("super_admin", "Super Admin"),
        ("admin", "Administrator"),
        ("staff", "Staff"),
    ]

    id = models.CharField(primary_key=True, max_length=64)
    email = models.EmailField(unique=True, db_index=True)
    full_name = models.CharField(max_length=255)
    phone = models.CharField(max_length=50, null=True, blank=True)
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default="staff")
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "profiles"
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.full_name} ({self.role})"


class UserMetadata(models.Model):
    """
    Free-form metadata the identity provider keeps per account
    (display name, account type, requested role, company).
    """

    user_id = models.CharField(max_length=64, unique=True)
    data = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "identity_user_metadata"

    def __str__(self):
        return f"metadata for user {self.user_id}"
