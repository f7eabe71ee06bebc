"""
Serializers for authentication endpoints.
"""

from rest_framework import serializers


class LoginRequestSerializer(serializers.Serializer):
    """Serializer for sign-in request."""

    email = serializers.EmailField(required=True)
    password = serializers.CharField(required=True, trim_whitespace=False)


class SignupRequestSerializer(serializers.Serializer):
    """Serializer for customer sign-up request."""

    email = serializers.CharField(required=False, allow_blank=True, default="")
    password = serializers.CharField(
        required=False, allow_blank=True, default="", trim_whitespace=False
    )
    fullName = serializers.CharField(
        source="full_name", required=False, allow_blank=True, default=""
    )
    company = serializers.CharField(required=False, allow_blank=True, allow_null=True, default=None)
    phone = serializers.CharField(required=False, allow_blank=True, allow_null=True, default=None)


class SignupResponseSerializer(serializers.Serializer):
    """Serializer for RegisteredCustomerDTO."""

    userId = serializers.CharField(source="user_id")
    customerId = serializers.UUIDField(source="customer_id")
    email = serializers.EmailField()


class ProfileSummarySerializer(serializers.Serializer):
    id = serializers.CharField()
    email = serializers.EmailField()
    full_name = serializers.CharField()
    role = serializers.CharField()
    role_label = serializers.CharField()
    is_active = serializers.BooleanField()


class CustomerSummarySerializer(serializers.Serializer):
    id = serializers.CharField()
    email = serializers.EmailField()
    full_name = serializers.CharField()
    company = serializers.CharField(allow_null=True)
    is_active = serializers.BooleanField()


class IdentityResponseSerializer(serializers.Serializer):
    """Serializer for a resolved identity."""

    subject_id = serializers.CharField()
    email = serializers.EmailField(allow_null=True)
    kind = serializers.ChoiceField(choices=["staff", "customer", "none"])
    profile = ProfileSummarySerializer(allow_null=True)
    customer = CustomerSummarySerializer(allow_null=True)
