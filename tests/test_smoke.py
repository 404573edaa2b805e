"""Minimal smoke tests for initial scaffolding."""

from __future__ import annotations

import pytest


@pytest.mark.unit
def test_rendering_imports() -> None:
    """Import the rendering package and verify the public entry points exist."""

    from rendering import render_widget, render_widget_payload

    assert callable(render_widget)
    assert callable(render_widget_payload)


@pytest.mark.integration
def test_django_project_loads() -> None:
    """Import and initialize Django to verify settings are valid."""

    import os

    import django
    from django.conf import settings

    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "beakdash.settings")
    django.setup()
    assert "workspace.apps.WorkspaceConfig" in settings.INSTALLED_APPS
