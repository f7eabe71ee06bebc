"""
URL configuration for staff management endpoints.
"""

from django.urls import path

from api.v1.staff import views

urlpatterns = [
    path("staff", views.StaffCollectionView.as_view(), name="staff"),
    path("staff/<str:profile_id>", views.StaffMemberView.as_view(), name="staff-member"),
]
