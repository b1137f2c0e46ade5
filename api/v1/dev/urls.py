"""
URL configuration for developer API endpoints.
"""

from django.urls import path

from api.v1.dev import views

urlpatterns = [
    path(
        "teams/<uuid:team_id>/licenses",
        views.IssueLicenseView.as_view(),
        name="issue-license",
    ),
]
