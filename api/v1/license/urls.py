"""
URL configuration for license validation endpoints.
"""

from django.urls import path

from api.v1.license import views

urlpatterns = [
    path(
        "<str:team_id>/heartbeat",
        views.LicenseHeartbeatView.as_view(),
        name="license-heartbeat",
    ),
    path(
        "<str:team_id>/verify",
        views.LicenseVerifyView.as_view(),
        name="license-verify",
    ),
]
