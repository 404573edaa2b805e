"""App configuration for the workspace Django app."""

from __future__ import annotations

from django.apps import AppConfig


class WorkspaceConfig(AppConfig):
    """AppConfig for spaces, dashboards and widgets."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "workspace"
    verbose_name = "Workspace"
