"""View DTOs returned by the widget transforms.

DTOs are plain data containers handed to the widget-rendering layer. They
intentionally avoid any Django/ORM dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

NO_DATA_MESSAGE = "No data available"

Polarity = Literal["positive", "negative", "zero"]
ChartStatus = Literal["ok", "empty", "unconfigured", "unsupported"]


@dataclass(frozen=True, slots=True)
class TableView:
    """Rows and display cells for a table widget.

    Attributes:
        columns: Column headers, in display order.
        rows: Rows remaining after limit, sort and filter.
        cells: Display text per row, aligned with `columns`.
        empty: True when there was no input data at all.
        message: Placeholder text shown instead of a table when `empty`.
    """

    columns: tuple[str, ...]
    rows: tuple[dict[str, object], ...]
    cells: tuple[tuple[str, ...], ...]
    empty: bool = False
    message: str | None = None

    def as_json(self) -> dict[str, Any]:
        """Return a JSON-serializable representation."""

        return {
            "kind": "table",
            "empty": self.empty,
            "message": self.message,
            "columns": list(self.columns),
            "rows": [list(cells) for cells in self.cells],
        }


@dataclass(frozen=True, slots=True)
class CounterView:
    """A single formatted aggregate value plus polarity metadata.

    Attributes:
        display_value: Formatted value text.
        value: The raw selected value.
        label: Column the value was read from.
        polarity: Sign of a numeric value; None for non-numeric values.
        icon: Icon key, or None when icons are hidden.
        color_class: CSS color class, or None when color coding is off.
        title: Optional widget title.
    """

    display_value: str
    value: object = None
    label: str = ""
    polarity: Polarity | None = None
    icon: str | None = None
    color_class: str | None = None
    title: str = ""
    empty: bool = False
    message: str | None = None

    def as_json(self) -> dict[str, Any]:
        """Return a JSON-serializable representation."""

        return {
            "kind": "counter",
            "empty": self.empty,
            "message": self.message,
            "displayValue": self.display_value,
            "label": self.label,
            "polarity": self.polarity,
            "icon": self.icon,
            "colorClass": self.color_class,
            "title": self.title,
        }


@dataclass(frozen=True, slots=True)
class ChartView:
    """Charting-library properties for a chart widget.

    Attributes:
        status: "ok" when `props` can be handed to the charting library.
        chart_type: Requested chart type.
        props: Library properties including the (possibly normalized) data.
        message: Placeholder text for non-"ok" statuses.
    """

    status: ChartStatus
    chart_type: str | None
    props: dict[str, Any]
    message: str | None = None

    def as_json(self) -> dict[str, Any]:
        """Return a JSON-serializable representation."""

        return {
            "kind": "chart",
            "status": self.status,
            "chartType": self.chart_type,
            "message": self.message,
            "props": self.props,
        }


@dataclass(frozen=True, slots=True)
class TextView:
    """Text content with presentation classes."""

    lines: tuple[str, ...]
    classes: tuple[str, ...]
    style: dict[str, str]
    empty: bool = False
    message: str | None = None

    def as_json(self) -> dict[str, Any]:
        """Return a JSON-serializable representation."""

        return {
            "kind": "text",
            "empty": self.empty,
            "message": self.message,
            "lines": list(self.lines),
            "classes": list(self.classes),
            "style": dict(self.style),
        }


@dataclass(frozen=True, slots=True)
class UnsupportedView:
    """Placeholder for widgets whose stored type tag is not recognized."""

    widget_type: str
    message: str

    def as_json(self) -> dict[str, Any]:
        """Return a JSON-serializable representation."""

        return {"kind": "unsupported", "widgetType": self.widget_type, "message": self.message}


WidgetView = TableView | CounterView | ChartView | TextView | UnsupportedView


@dataclass(frozen=True, slots=True)
class RenderedWidget:
    """A rendered widget: its type tag plus the view produced for it."""

    widget_type: str
    view: WidgetView

    def as_json(self) -> dict[str, Any]:
        """Return a JSON-serializable representation."""

        return {"type": self.widget_type, "view": self.view.as_json()}
