"""JSON views that render persisted widgets and dashboards."""

from __future__ import annotations

from django.contrib.auth.decorators import login_required
from django.http import HttpRequest, JsonResponse
from django.shortcuts import get_object_or_404
from django.views.decorators.http import require_GET

from workspace.models import Dashboard, Widget
from workspace.services import render_dashboard, render_widget_record, spaces_for_user, widget_summary


@require_GET
@login_required
def widget_render_api(request: HttpRequest, widget_id: int) -> JsonResponse:
    """Render one widget visible to the requesting user."""

    widget = get_object_or_404(Widget, pk=widget_id, space__in=spaces_for_user(request.user))
    rendered = render_widget_record(widget)
    return JsonResponse({"widget": widget_summary(widget), **rendered.as_json()})


@require_GET
@login_required
def dashboard_render_api(request: HttpRequest, dashboard_id: int) -> JsonResponse:
    """Render every widget on a dashboard visible to the requesting user."""

    dashboard = get_object_or_404(
        Dashboard.objects.select_related("space"),
        pk=dashboard_id,
        space__in=spaces_for_user(request.user),
    )
    widgets = render_dashboard(dashboard)
    return JsonResponse(
        {
            "dashboard": {
                "id": dashboard.pk,
                "name": dashboard.name,
                "description": dashboard.description,
                "spaceId": dashboard.space_id,
                "layout": dashboard.layout,
            },
            "widgets": [item.as_json() for item in widgets],
        }
    )


@require_GET
@login_required
def space_dashboards_api(request: HttpRequest, space_id: int) -> JsonResponse:
    """List the active dashboards of a space visible to the requesting user."""

    space = get_object_or_404(spaces_for_user(request.user), pk=space_id)
    dashboards = space.dashboards.filter(is_active=True).order_by("name", "id")
    return JsonResponse(
        {
            "space": {"id": space.pk, "name": space.name, "slug": space.slug},
            "dashboards": [
                {"id": dashboard.pk, "name": dashboard.name, "description": dashboard.description}
                for dashboard in dashboards
            ],
        }
    )
