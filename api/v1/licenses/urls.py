"""
URL configuration for license endpoints.
"""

from django.urls import path

from api.v1.licenses import views

urlpatterns = [
    path("<uuid:license_id>/revoke", views.RevokeLicenseView.as_view(), name="revoke-license"),
    path("activate", views.ActivateSeatView.as_view(), name="activate-seat"),
]
