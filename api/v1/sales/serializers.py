"""
Serializers for sales endpoints.
"""

from rest_framework import serializers


class ProcessPaymentRequestSerializer(serializers.Serializer):
    """Serializer for the process-payment fast path."""

    customer_email = serializers.EmailField(required=True)
    product_sku = serializers.CharField(required=True, max_length=64)
    customer_name = serializers.CharField(required=False, allow_blank=True, max_length=255)
    payment_reference = serializers.CharField(required=False, allow_blank=True, max_length=255)


class ProcessedPaymentSerializer(serializers.Serializer):
    """Serializer for ProcessedPaymentDTO."""

    customer_id = serializers.UUIDField()
    subscription_id = serializers.UUIDField()
    license_id = serializers.UUIDField()
    license_key = serializers.CharField()
    sale_id = serializers.UUIDField()
