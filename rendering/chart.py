"""Chart widget transform: build charting-library properties from config.

The client charting library owns drawing. This module decides whether a
chart can be drawn, prepares its data (numeric coercion and, for stacked
area charts, grid normalization) and maps config fields to library props.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from .dto import NO_DATA_MESSAGE, ChartView
from .normalize import normalize_rows
from .rows import Rows, ensure_numeric
from .widget_config import ChartWidgetConfig, NormalizeConfig

CONFIGURE_CHART_MESSAGE = "Configure chart"
UNSUPPORTED_CHART_MESSAGE = "Unsupported chart type"

# Chart types that cannot render without both axis fields.
AXIS_CHART_TYPES = frozenset({"bar", "column", "line", "area"})


def _shared_tooltip_interaction() -> dict[str, Any]:
    return {"elementHighlight": False, "tooltip": {"shared": True}}


def render_chart(rows: Rows | None, config: ChartWidgetConfig | None = None) -> ChartView:
    """Build the charting-library payload for a chart widget.

    Args:
        rows: Widget rows.
        config: Chart configuration.

    Returns:
        ChartView whose status is "ok" when `props` can be drawn.
    """

    config = config or ChartWidgetConfig()
    chart_type = config.chart_type
    if not rows:
        return ChartView(status="empty", chart_type=chart_type, props={}, message=NO_DATA_MESSAGE)

    builder = _BUILDERS.get(chart_type or "")
    if builder is None:
        return ChartView(status="unsupported", chart_type=chart_type, props={}, message=UNSUPPORTED_CHART_MESSAGE)

    if chart_type in AXIS_CHART_TYPES and (not config.x_field or not config.y_field):
        return ChartView(status="unconfigured", chart_type=chart_type, props={}, message=CONFIGURE_CHART_MESSAGE)

    return ChartView(status="ok", chart_type=chart_type, props=_compact(builder(config, rows)))


def _bar_props(config: ChartWidgetConfig, rows: Rows) -> dict[str, Any]:
    return {
        "data": ensure_numeric(rows),
        "legend": {"position": "top"},
        "xField": config.x_field,
        "yField": config.y_field,
        "colorField": config.color_field,
        "stack": config.stack,
        "group": config.group,
        "normalize": config.normalize,
        "seriesField": config.series_field,
        "interaction": _shared_tooltip_interaction(),
        "sort": {"reverse": False},
        "axis": {
            "x": {"tick": True, "title": True},
            "y": {"grid": True, "tick": True, "label": True, "title": True},
        },
    }


def _column_props(config: ChartWidgetConfig, rows: Rows) -> dict[str, Any]:
    return {
        "data": ensure_numeric(rows),
        "legend": {"position": "top"},
        "xField": config.x_field,
        "yField": config.y_field,
        "seriesField": config.series_field,
        "stack": config.stack,
        "colorField": config.color_field,
        "sort": config.sort,
        "group": config.group,
        "percent": config.percent,
        "normalize": config.normalize,
        "style": config.style,
        "interaction": _shared_tooltip_interaction(),
    }


def _line_props(config: ChartWidgetConfig, rows: Rows) -> dict[str, Any]:
    props: dict[str, Any] = {
        "data": ensure_numeric(rows),
        "xField": config.x_field,
        "yField": config.y_field,
        "seriesField": config.series_field,
        "colorField": config.color_field,
        "point": config.point,
        "interaction": config.interaction,
        "style": config.style,
    }
    if config.tooltip is False:
        props["tooltip"] = False
    return props


def _area_props(config: ChartWidgetConfig, rows: Rows) -> dict[str, Any]:
    data: Rows | None = ensure_numeric(rows)
    if config.color_field:
        data = normalize_rows(
            data,
            NormalizeConfig(
                x_field=config.x_field or "",
                y_field=config.y_field or "",
                color_field=config.color_field,
            ),
        )
    return {
        "data": list(data or ()),
        "xField": config.x_field,
        "yField": config.y_field,
        "colorField": config.color_field,
        "shapeField": "smooth",
        "stack": config.stack,
        "normalize": config.normalize,
        "tooltip": {"channel": "y0", "valueFormatter": ".3%"},
    }


def _pie_props(config: ChartWidgetConfig, rows: Rows) -> dict[str, Any]:
    return {
        "data": ensure_numeric(rows),
        "angleField": config.y_field,
        "colorField": config.color_field,
        "innerRadius": config.inner_radius,
        "label": config.label,
        "legend": config.legend,
    }


def _scatter_props(config: ChartWidgetConfig, rows: Rows) -> dict[str, Any]:
    return {
        "data": ensure_numeric(rows),
        "xField": config.x_field,
        "yField": config.y_field,
        "colorField": config.color_field,
        "sizeField": config.size_field,
        "shapeField": config.shape_field,
        "style": {"fillOpacity": 0.3, "lineWidth": 1},
    }


def _dual_axes_props(config: ChartWidgetConfig, rows: Rows) -> dict[str, Any]:
    return {
        "data": ensure_numeric(rows),
        "xField": config.x_field,
        "children": list(config.children) if config.children is not None else None,
        "legend": {"color": {"itemMarker": "rect"}},
    }


def _histogram_props(config: ChartWidgetConfig, rows: Rows) -> dict[str, Any]:
    return {
        "data": ensure_numeric(rows),
        "binField": config.bin_field,
        "binNumber": 10,
        "colorField": config.color_field,
        "channel": "count",
        "stack": {"orderBy": "series"},
        "style": {"inset": 0.5},
        "interaction": _shared_tooltip_interaction(),
    }


def _word_cloud_props(config: ChartWidgetConfig, rows: Rows) -> dict[str, Any]:
    return {
        "data": [dict(row) for row in rows],
        "autoFit": True,
        "layout": {"spiral": "rectangular"},
        "textField": config.color_field,
        "colorField": config.color_field,
    }


_BUILDERS: dict[str, Callable[[ChartWidgetConfig, Rows], dict[str, Any]]] = {
    "bar": _bar_props,
    "column": _column_props,
    "line": _line_props,
    "area": _area_props,
    "pie": _pie_props,
    "scatter": _scatter_props,
    "dual-axes": _dual_axes_props,
    "histogram": _histogram_props,
    "word-cloud": _word_cloud_props,
}


def _compact(props: dict[str, Any]) -> dict[str, Any]:
    """Drop unset (None) options so the library applies its own defaults."""

    return {key: value for key, value in props.items() if value is not None}
