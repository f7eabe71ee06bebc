"""
URL configuration for payment provider webhooks.
"""

from django.urls import path

from api.v1.webhooks import views

urlpatterns = [
    path("payments", views.PaymentWebhookView.as_view(), name="payment-webhook"),
]
