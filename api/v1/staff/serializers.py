"""
Serializers for staff management endpoints.

Presence of the required fields is checked by the handler so that the
error message names every missing field at once.
"""

from rest_framework import serializers


class CreateStaffRequestSerializer(serializers.Serializer):
    """Serializer for staff provisioning request."""

    email = serializers.CharField(required=False, allow_blank=True, default="")
    password = serializers.CharField(
        required=False, allow_blank=True, default="", trim_whitespace=False
    )
    fullName = serializers.CharField(
        source="full_name", required=False, allow_blank=True, default=""
    )
    phone = serializers.CharField(required=False, allow_blank=True, allow_null=True, default=None)
    role = serializers.CharField(required=False, allow_blank=True, allow_null=True, default=None)


class UpdateStaffRequestSerializer(serializers.Serializer):
    """Serializer for staff edit request."""

    fullName = serializers.CharField(source="full_name", required=False, max_length=255)
    phone = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    role = serializers.CharField(required=False)
    isActive = serializers.BooleanField(source="is_active", required=False)


class ProfileSerializer(serializers.Serializer):
    """Serializer for ProfileDTO."""

    id = serializers.CharField()
    email = serializers.EmailField()
    fullName = serializers.CharField(source="full_name")
    phone = serializers.CharField(allow_null=True)
    role = serializers.CharField()
    roleLabel = serializers.CharField(source="role_label")
    isActive = serializers.BooleanField(source="is_active")
    createdAt = serializers.DateTimeField(source="created_at")


class CreateStaffResponseSerializer(serializers.Serializer):
    """Serializer for CreateStaffResultDTO."""

    success = serializers.BooleanField()
    userId = serializers.CharField(source="user_id")
    profile = ProfileSerializer(allow_null=True)
    warning = serializers.CharField(allow_null=True, required=False)


class StaffListResponseSerializer(serializers.Serializer):
    """Serializer for StaffListDTO."""

    staff = ProfileSerializer(many=True)
    creatableRoles = serializers.ListField(child=serializers.CharField(), source="creatable_roles")
