"""
URL configuration for subscription endpoints.
"""

from django.urls import path

from api.v1.subscriptions import views

urlpatterns = [
    path("checkout", views.StartCheckoutView.as_view(), name="start-checkout"),
    path("trials", views.ListTrialsView.as_view(), name="list-trials"),
]
