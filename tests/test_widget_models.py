"""Integration tests for widget model validation."""

from __future__ import annotations

import pytest
from django.core.exceptions import ValidationError

from rendering.widget_config import CounterWidgetConfig, UnknownWidgetTypeError
from workspace.models import Dashboard, DashboardWidget, Space, Widget

pytestmark = pytest.mark.integration


@pytest.mark.django_db
def test_widget_defaults(space) -> None:
    """New widgets get an empty config, no rows and a default grid position."""

    widget = Widget.objects.create(space=space, name="Notes", type=Widget.Type.TEXT)
    assert widget.config == {}
    assert widget.data == []
    assert widget.position == {"x": 0, "y": 0, "w": 3, "h": 2}


@pytest.mark.django_db
def test_invalid_config_is_rejected_on_save(space) -> None:
    widget = Widget(space=space, name="Bad", type=Widget.Type.COUNTER, config={"format": "roman"})

    with pytest.raises(ValidationError) as excinfo:
        widget.save()

    assert "config" in excinfo.value.message_dict
    assert not Widget.objects.filter(name="Bad").exists()


@pytest.mark.django_db
def test_non_list_data_is_rejected(space) -> None:
    widget = Widget(space=space, name="Bad rows", type=Widget.Type.TABLE, data={"a": 1})

    with pytest.raises(ValidationError) as excinfo:
        widget.save()

    assert excinfo.value.message_dict["data"] == ["Widget data must be a list of objects."]


@pytest.mark.django_db
def test_ignored_config_keys_do_not_block_save(space) -> None:
    """Keys of other widget types are tolerated."""

    widget = Widget.objects.create(
        space=space,
        name="Mixed",
        type=Widget.Type.TEXT,
        config={"textContent": "hi", "chartType": "bar"},
    )
    assert widget.pk is not None


@pytest.mark.django_db
def test_typed_config_decodes_stored_payload(space) -> None:
    widget = Widget.objects.create(
        space=space,
        name="Revenue",
        type=Widget.Type.COUNTER,
        config={"valueField": "revenue", "format": "currency", "decimals": 2},
    )
    assert widget.typed_config() == CounterWidgetConfig(value_field="revenue", format="currency", decimals=2)


@pytest.mark.django_db
def test_typed_config_raises_for_unknown_stored_type(space) -> None:
    """Rows written around model validation still fail loudly when decoded."""

    widget = Widget.objects.create(space=space, name="Legacy", type=Widget.Type.TEXT)
    Widget.objects.filter(pk=widget.pk).update(type="gauge")
    widget.refresh_from_db()

    with pytest.raises(UnknownWidgetTypeError):
        widget.typed_config()


@pytest.mark.django_db
def test_widget_can_sit_on_several_dashboards(space) -> None:
    widget = Widget.objects.create(space=space, name="Shared", type=Widget.Type.TEXT)
    first = Dashboard.objects.create(space=space, name="First")
    second = Dashboard.objects.create(space=space, name="Second")
    DashboardWidget.objects.create(dashboard=first, widget=widget)
    DashboardWidget.objects.create(dashboard=second, widget=widget, position={"x": 4, "y": 0})

    assert set(widget.dashboards.values_list("name", flat=True)) == {"First", "Second"}


@pytest.mark.django_db
def test_placement_across_spaces_is_rejected(space) -> None:
    other = Space.objects.create(name="Finance", slug="finance")
    foreign = Widget.objects.create(space=other, name="Foreign", type=Widget.Type.TEXT)
    dashboard = Dashboard.objects.create(space=space, name="Overview")

    with pytest.raises(ValidationError) as excinfo:
        DashboardWidget.objects.create(dashboard=dashboard, widget=foreign)

    assert excinfo.value.message_dict["widget"] == ["Widget must belong to the dashboard's space."]
    assert not DashboardWidget.objects.exists()


@pytest.mark.django_db
def test_placement_of_spaceless_widget_is_rejected(space) -> None:
    orphan = Widget.objects.create(name="Orphan", type=Widget.Type.TEXT)
    dashboard = Dashboard.objects.create(space=space, name="Overview")

    with pytest.raises(ValidationError):
        DashboardWidget.objects.create(dashboard=dashboard, widget=orphan)
