"""URL configuration for BeakDash."""

from __future__ import annotations

from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("", include("workspace.urls")),
    path("admin/", admin.site.urls),
]
