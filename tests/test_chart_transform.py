"""Unit tests for chart widget props building."""

from __future__ import annotations

import pytest

from rendering.chart import render_chart
from rendering.widget_config import ChartWidgetConfig

pytestmark = pytest.mark.unit

SALES = [
    {"month": "Jan", "region": "North", "sales": "400"},
    {"month": "Jan", "region": "South", "sales": "250"},
    {"month": "Feb", "region": "North", "sales": "300"},
]


@pytest.mark.parametrize("rows", [[], None])
def test_empty_data_renders_placeholder(rows) -> None:
    """No rows yields the no-data status regardless of chart type."""

    view = render_chart(rows, ChartWidgetConfig(chart_type="bar", x_field="month", y_field="sales"))
    assert view.status == "empty"
    assert view.message == "No data available"
    assert view.props == {}


@pytest.mark.parametrize("chart_type", ["radar", None, ""])
def test_unknown_chart_type_is_unsupported(chart_type) -> None:
    """Chart types without a builder are reported instead of drawn."""

    view = render_chart(SALES, ChartWidgetConfig(chart_type=chart_type, x_field="month", y_field="sales"))
    assert view.status == "unsupported"
    assert view.message == "Unsupported chart type"


@pytest.mark.parametrize("chart_type", ["bar", "column", "line", "area"])
def test_axis_charts_need_both_fields(chart_type: str) -> None:
    """Axis charts missing an axis field ask to be configured."""

    view = render_chart(SALES, ChartWidgetConfig(chart_type=chart_type, x_field="month"))
    assert view.status == "unconfigured"
    assert view.message == "Configure chart"


def test_pie_renders_without_x_field() -> None:
    """Pie charts only need the angle and color fields."""

    view = render_chart(SALES, ChartWidgetConfig(chart_type="pie", y_field="sales", color_field="region"))
    assert view.status == "ok"
    assert view.props["angleField"] == "sales"
    assert view.props["colorField"] == "region"


def test_bar_props_coerce_numeric_columns_and_drop_unset_options() -> None:
    """Numeric strings become numbers and None-valued options are omitted."""

    view = render_chart(SALES, ChartWidgetConfig(chart_type="bar", x_field="month", y_field="sales"))

    assert view.status == "ok"
    assert [row["sales"] for row in view.props["data"]] == [400, 250, 300]
    assert view.props["xField"] == "month"
    assert view.props["yField"] == "sales"
    assert "colorField" not in view.props
    assert "stack" not in view.props
    assert view.props["interaction"] == {"elementHighlight": False, "tooltip": {"shared": True}}


def test_input_rows_are_not_mutated() -> None:
    """Coercion works on copies of the rows."""

    rows = [dict(row) for row in SALES]
    render_chart(rows, ChartWidgetConfig(chart_type="column", x_field="month", y_field="sales"))
    assert rows == SALES


def test_stacked_area_is_normalized_to_a_dense_grid() -> None:
    """Area charts with a series column fill missing points with zero."""

    config = ChartWidgetConfig(chart_type="area", x_field="month", y_field="sales", color_field="region", stack=True)
    view = render_chart(SALES, config)

    assert view.props["data"] == [
        {"month": "Jan", "region": "North", "sales": 400},
        {"month": "Jan", "region": "South", "sales": 250},
        {"month": "Feb", "region": "North", "sales": 300},
        {"month": "Feb", "region": "South", "sales": 0},
    ]
    assert view.props["stack"] is True
    assert view.props["tooltip"] == {"channel": "y0", "valueFormatter": ".3%"}


def test_area_without_series_keeps_rows() -> None:
    """Without a color field area data is only coerced."""

    view = render_chart(SALES, ChartWidgetConfig(chart_type="area", x_field="month", y_field="sales"))
    assert len(view.props["data"]) == len(SALES)


def test_word_cloud_data_is_not_coerced() -> None:
    """Word clouds keep their row values as stored."""

    rows = [{"word": "alpha", "count": "3"}]
    view = render_chart(rows, ChartWidgetConfig(chart_type="word-cloud", color_field="word"))

    assert view.status == "ok"
    assert view.props["data"] == [{"word": "alpha", "count": "3"}]
    assert view.props["textField"] == "word"


def test_line_tooltip_can_be_disabled() -> None:
    """tooltip=False is forwarded; other values leave the library default."""

    hidden = render_chart(SALES, ChartWidgetConfig(chart_type="line", x_field="month", y_field="sales", tooltip=False))
    default = render_chart(SALES, ChartWidgetConfig(chart_type="line", x_field="month", y_field="sales"))

    assert hidden.props["tooltip"] is False
    assert "tooltip" not in default.props


def test_dual_axes_children_are_forwarded_as_list() -> None:
    """Child chart definitions are passed through unchanged."""

    children = ({"type": "interval", "yField": "sales"}, {"type": "line", "yField": "target"})
    view = render_chart(SALES, ChartWidgetConfig(chart_type="dual-axes", x_field="month", children=children))

    assert view.props["children"] == list(children)
    assert view.props["legend"] == {"color": {"itemMarker": "rect"}}


def test_histogram_uses_bin_field() -> None:
    """Histograms bin a single numeric column."""

    view = render_chart([{"age": 31}, {"age": 44}], ChartWidgetConfig(chart_type="histogram", bin_field="age"))
    assert view.props["binField"] == "age"
    assert view.props["binNumber"] == 10


def test_chart_as_json() -> None:
    """The JSON payload carries status, type and props."""

    payload = render_chart(SALES, ChartWidgetConfig(chart_type="scatter", x_field="month", y_field="sales")).as_json()
    assert payload["kind"] == "chart"
    assert payload["status"] == "ok"
    assert payload["chartType"] == "scatter"
    assert payload["message"] is None
    assert payload["props"]["style"] == {"fillOpacity": 0.3, "lineWidth": 1}
