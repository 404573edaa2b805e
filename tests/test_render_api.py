"""Integration tests for the widget and dashboard render endpoints."""

from __future__ import annotations

import pytest
from django.contrib.auth import get_user_model
from django.urls import reverse

from workspace.models import Dashboard, DashboardWidget, Space, Widget

pytestmark = pytest.mark.integration


def _counter(space: Space, name: str = "Revenue", **kwargs) -> Widget:
    return Widget.objects.create(
        space=space,
        name=name,
        type=Widget.Type.COUNTER,
        config={"valueField": "revenue", "format": "currency", "decimals": 2},
        data=[{"revenue": 1234.5}],
        **kwargs,
    )


@pytest.mark.django_db
def test_anonymous_requests_redirect_to_login(client, space) -> None:
    widget = _counter(space)

    response = client.get(reverse("workspace:widget_render", args=[widget.pk]))

    assert response.status_code == 302
    assert response["Location"].startswith("/admin/login/")


@pytest.mark.django_db
def test_widget_render_returns_view_payload(auth_client, space) -> None:
    widget = _counter(space)

    response = auth_client.get(reverse("workspace:widget_render", args=[widget.pk]))

    assert response.status_code == 200
    payload = response.json()
    assert payload["widget"] == {"id": widget.pk, "name": "Revenue", "description": "", "spaceId": space.pk}
    assert payload["type"] == "counter"
    assert payload["view"]["displayValue"] == "$1,234.50"
    assert payload["view"]["colorClass"] == "text-green-500"


@pytest.mark.django_db
def test_widgets_of_other_spaces_are_not_found(auth_client) -> None:
    other = Space.objects.create(name="Finance", slug="finance")
    widget = _counter(other)

    response = auth_client.get(reverse("workspace:widget_render", args=[widget.pk]))
    assert response.status_code == 404


@pytest.mark.django_db
def test_widgets_without_space_are_not_found(auth_client) -> None:
    widget = Widget.objects.create(name="Orphan", type=Widget.Type.TEXT, config={"textContent": "hi"})

    response = auth_client.get(reverse("workspace:widget_render", args=[widget.pk]))
    assert response.status_code == 404


@pytest.mark.django_db
def test_superuser_sees_every_space(client) -> None:
    admin = get_user_model().objects.create_superuser(username="root", password="password")
    other = Space.objects.create(name="Finance", slug="finance")
    widget = _counter(other)
    client.force_login(admin)

    response = client.get(reverse("workspace:widget_render", args=[widget.pk]))
    assert response.status_code == 200


@pytest.mark.django_db
def test_post_is_not_allowed(auth_client, space) -> None:
    widget = _counter(space)

    response = auth_client.post(reverse("workspace:widget_render", args=[widget.pk]))
    assert response.status_code == 405


@pytest.mark.django_db
def test_unsupported_stored_type_renders_placeholder(auth_client, space) -> None:
    """A widget whose type tag is unknown still renders, as unsupported."""

    widget = Widget.objects.create(space=space, name="Legacy", type=Widget.Type.TEXT)
    Widget.objects.filter(pk=widget.pk).update(type="gauge")

    response = auth_client.get(reverse("workspace:widget_render", args=[widget.pk]))

    assert response.status_code == 200
    assert response.json()["view"] == {
        "kind": "unsupported",
        "widgetType": "gauge",
        "message": "Unsupported widget type: gauge",
    }


@pytest.mark.django_db
def test_dashboard_render_orders_widgets_by_position(auth_client, space) -> None:
    """Widgets are returned row by row, then column by column."""

    dashboard = Dashboard.objects.create(space=space, name="Overview", layout={"cols": 12})
    bottom = Widget.objects.create(space=space, name="Bottom", type=Widget.Type.TEXT, config={"textContent": "b"})
    right = Widget.objects.create(space=space, name="Right", type=Widget.Type.TEXT, config={"textContent": "r"})
    left = _counter(space, name="Left", position={"x": 0, "y": 0, "w": 3, "h": 2})
    DashboardWidget.objects.create(dashboard=dashboard, widget=bottom, position={"x": 0, "y": 4})
    DashboardWidget.objects.create(dashboard=dashboard, widget=right, position={"x": "6", "y": 0})
    DashboardWidget.objects.create(dashboard=dashboard, widget=left)

    response = auth_client.get(reverse("workspace:dashboard_render", args=[dashboard.pk]))

    assert response.status_code == 200
    payload = response.json()
    assert payload["dashboard"]["name"] == "Overview"
    assert payload["dashboard"]["layout"] == {"cols": 12}
    assert [item["name"] for item in payload["widgets"]] == ["Left", "Right", "Bottom"]
    assert payload["widgets"][0]["position"] == {"x": 0, "y": 0, "w": 3, "h": 2}
    assert payload["widgets"][0]["type"] == "counter"
    assert payload["widgets"][2]["view"]["lines"] == ["b"]


@pytest.mark.django_db
def test_dashboard_of_other_space_is_not_found(auth_client) -> None:
    other = Space.objects.create(name="Finance", slug="finance")
    dashboard = Dashboard.objects.create(space=other, name="Hidden")

    response = auth_client.get(reverse("workspace:dashboard_render", args=[dashboard.pk]))
    assert response.status_code == 404


@pytest.mark.django_db
def test_space_dashboards_lists_active_dashboards(auth_client, space) -> None:
    Dashboard.objects.create(space=space, name="Sales")
    Dashboard.objects.create(space=space, name="Archive", is_active=False)
    Dashboard.objects.create(space=space, name="Marketing")

    response = auth_client.get(reverse("workspace:space_dashboards", args=[space.pk]))

    assert response.status_code == 200
    payload = response.json()
    assert payload["space"] == {"id": space.pk, "name": "Analytics", "slug": "analytics"}
    assert [item["name"] for item in payload["dashboards"]] == ["Marketing", "Sales"]


@pytest.mark.django_db
def test_space_dashboards_requires_membership(auth_client) -> None:
    other = Space.objects.create(name="Finance", slug="finance")

    response = auth_client.get(reverse("workspace:space_dashboards", args=[other.pk]))
    assert response.status_code == 404


@pytest.mark.django_db
def test_dashboard_render_skips_widgets_of_other_spaces(auth_client, space) -> None:
    """A placement written around model validation never exposes a foreign widget."""

    other = Space.objects.create(name="Finance", slug="finance")
    secret = _counter(other, name="Secret revenue")
    visible = _counter(space, name="Revenue")
    dashboard = Dashboard.objects.create(space=space, name="Overview")
    DashboardWidget.objects.bulk_create(
        [
            DashboardWidget(dashboard=dashboard, widget=secret, position={"x": 0, "y": 0}),
            DashboardWidget(dashboard=dashboard, widget=visible, position={"x": 0, "y": 1}),
        ]
    )

    direct = auth_client.get(reverse("workspace:widget_render", args=[secret.pk]))
    response = auth_client.get(reverse("workspace:dashboard_render", args=[dashboard.pk]))

    assert direct.status_code == 404
    assert response.status_code == 200
    assert [item["name"] for item in response.json()["widgets"]] == ["Revenue"]
