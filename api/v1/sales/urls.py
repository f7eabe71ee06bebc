"""
URL configuration for sales endpoints.
"""

from django.urls import path

from api.v1.sales import views

urlpatterns = [
    path("process-payment", views.ProcessPaymentView.as_view(), name="process-payment"),
]
