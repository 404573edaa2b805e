"""Service helpers connecting persisted widgets to the rendering package.

Views call into these helpers so the rendering flow (scope, order, decode,
render) stays testable without HTTP.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from django.db.models import QuerySet

from rendering.dispatch import render_widget_payload
from rendering.dto import RenderedWidget, UnsupportedView
from workspace.models import Dashboard, DashboardWidget, Space, SpaceMembership, Widget

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PlacedWidget:
    """A rendered widget together with its dashboard placement."""

    widget: Widget
    position: dict[str, Any]
    rendered: RenderedWidget

    def as_json(self) -> dict[str, Any]:
        """Return a JSON-serializable representation."""

        return {
            **widget_summary(self.widget),
            "position": self.position,
            **self.rendered.as_json(),
        }


def spaces_for_user(user) -> QuerySet[Space]:
    """Return the spaces visible to `user`.

    Args:
        user: Authenticated Django user.

    Returns:
        All spaces for superusers, otherwise spaces the user is a member of.
    """

    if getattr(user, "is_superuser", False):
        return Space.objects.all()
    return Space.objects.filter(memberships__user=user).distinct()


def can_manage_space(user, space: Space) -> bool:
    """Return True when `user` may edit `space` and its memberships.

    Superusers always may; other users need the owner or admin role.
    """

    if getattr(user, "is_superuser", False):
        return True
    return SpaceMembership.objects.filter(
        user=user,
        space=space,
        role__in=(SpaceMembership.Role.OWNER, SpaceMembership.Role.ADMIN),
    ).exists()


def widget_summary(widget: Widget) -> dict[str, Any]:
    """Return the identifying fields of a widget for API payloads."""

    return {
        "id": widget.pk,
        "name": widget.name,
        "description": widget.description,
        "spaceId": widget.space_id,
    }


def render_widget_record(widget: Widget) -> RenderedWidget:
    """Render a persisted widget from its stored config and cached rows.

    Args:
        widget: Widget instance.

    Returns:
        RenderedWidget; unknown type tags render as an UnsupportedView.
    """

    rows = widget.data if isinstance(widget.data, list) else []
    rendered = render_widget_payload(widget.type, widget.config, rows)
    if isinstance(rendered.view, UnsupportedView):
        logger.warning("Widget %s has unsupported type %r", widget.pk, widget.type)
    else:
        logger.debug("Rendered widget %s (%s) from %d rows", widget.pk, widget.type, len(rows))
    return rendered


def placement_sort_key(position: dict[str, Any], widget_id: int) -> tuple[int, int, int]:
    """Order placements by grid row, then column, then widget id."""

    return (_coord(position.get("y")), _coord(position.get("x")), widget_id)


def dashboard_placements(dashboard: Dashboard) -> list[tuple[Widget, dict[str, Any]]]:
    """Return the dashboard's widgets with effective positions in layout order.

    A placement without its own position falls back to the widget's position.
    Widgets outside the dashboard's space are skipped.
    """

    placements: QuerySet[DashboardWidget] = dashboard.placements.filter(
        widget__space=dashboard.space_id
    ).select_related("widget")
    placed: list[tuple[Widget, dict[str, Any]]] = []
    for placement in placements:
        position = placement.position or placement.widget.position or {}
        placed.append((placement.widget, dict(position)))
    placed.sort(key=lambda item: placement_sort_key(item[1], item[0].pk))
    return placed


def render_dashboard(dashboard: Dashboard) -> tuple[PlacedWidget, ...]:
    """Render every widget on a dashboard independently, in layout order."""

    rendered = tuple(
        PlacedWidget(widget=widget, position=position, rendered=render_widget_record(widget))
        for widget, position in dashboard_placements(dashboard)
    )
    logger.info("Rendered dashboard %s with %d widgets", dashboard.pk, len(rendered))
    return rendered


def _coord(value: object) -> int:
    """Best-effort grid coordinate parsing; missing or invalid values sort first."""

    if isinstance(value, bool) or value is None:
        return 0
    try:
        return int(float(str(value)))
    except (ValueError, OverflowError):
        return 0
