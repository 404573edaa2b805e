"""URL configuration for workspace views."""

from __future__ import annotations

from django.urls import path

from workspace import views

app_name = "workspace"

urlpatterns = [
    path("api/widgets/<int:widget_id>/render/", views.widget_render_api, name="widget_render"),
    path("api/dashboards/<int:dashboard_id>/render/", views.dashboard_render_api, name="dashboard_render"),
    path("api/spaces/<int:space_id>/dashboards/", views.space_dashboards_api, name="space_dashboards"),
]
