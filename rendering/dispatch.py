"""Dispatch a widget to the transform for its type."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, assert_never

from .chart import render_chart
from .counter import render_counter
from .dto import RenderedWidget, UnsupportedView, WidgetView
from .rows import Rows
from .table import render_table
from .text import render_text
from .widget_config import (
    ChartWidgetConfig,
    CounterWidgetConfig,
    TableWidgetConfig,
    TextWidgetConfig,
    UnknownWidgetTypeError,
    WidgetConfig,
    decode_widget_config,
    widget_type_of,
)


def render_widget(config: WidgetConfig, rows: Rows | None) -> RenderedWidget:
    """Render one widget from its typed configuration and rows.

    Args:
        config: Typed widget configuration; its variant selects the transform.
        rows: Widget rows (ignored by text widgets).

    Returns:
        RenderedWidget carrying the widget type tag and its view.
    """

    view: WidgetView
    if isinstance(config, ChartWidgetConfig):
        view = render_chart(rows, config)
    elif isinstance(config, TableWidgetConfig):
        view = render_table(rows, config)
    elif isinstance(config, CounterWidgetConfig):
        view = render_counter(rows, config)
    elif isinstance(config, TextWidgetConfig):
        view = render_text(config)
    else:
        assert_never(config)
    return RenderedWidget(widget_type=str(widget_type_of(config)), view=view)


def render_widget_payload(
    widget_type: object,
    config_payload: Mapping[str, Any] | None,
    rows: Rows | None,
) -> RenderedWidget:
    """Decode a stored widget configuration and render it.

    Unknown type tags render as an UnsupportedView instead of raising.
    """

    try:
        config = decode_widget_config(widget_type, config_payload)
    except UnknownWidgetTypeError as exc:
        tag = "" if widget_type is None else str(widget_type)
        return RenderedWidget(widget_type=tag, view=UnsupportedView(widget_type=tag, message=str(exc)))
    return render_widget(config, rows)
