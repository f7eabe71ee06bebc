"""
Serializers for subscription endpoints.
"""

from rest_framework import serializers


class StartCheckoutRequestSerializer(serializers.Serializer):
    """Serializer for start checkout request."""

    customer_id = serializers.UUIDField(required=True)
    product_id = serializers.UUIDField(required=True)
    auto_renew = serializers.BooleanField(required=False, default=False)


class SubscriptionSerializer(serializers.Serializer):
    """Serializer for SubscriptionDTO."""

    id = serializers.UUIDField()
    customer_id = serializers.UUIDField()
    product_id = serializers.UUIDField()
    subscription_type = serializers.CharField()
    status = serializers.CharField()
    payment_status = serializers.CharField()
    amount = serializers.DecimalField(max_digits=10, decimal_places=2)
    currency = serializers.CharField()
    trial_ends_at = serializers.DateTimeField(allow_null=True)
    created_at = serializers.DateTimeField()


class CheckoutResponseSerializer(serializers.Serializer):
    """Serializer for CheckoutDTO."""

    subscription = SubscriptionSerializer()
    license_id = serializers.UUIDField()
    license_key = serializers.CharField()
    sale_id = serializers.UUIDField()
