"""
Serializers for license endpoints.
"""

from rest_framework import serializers


class ActivateSeatRequestSerializer(serializers.Serializer):
    """Serializer for seat activation request."""

    license_key = serializers.CharField(required=False, max_length=64)


class LicenseSerializer(serializers.Serializer):
    """Serializer for LicenseDTO."""

    id = serializers.UUIDField()
    license_key = serializers.CharField()
    subscription_id = serializers.UUIDField()
    status = serializers.CharField()
    max_activations = serializers.IntegerField()
    current_activations = serializers.IntegerField()
    seats_remaining = serializers.IntegerField()
    expiration_date = serializers.DateTimeField(allow_null=True)
