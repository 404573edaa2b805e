"""Typed widget configuration, one variant per widget type.

Widgets persist their configuration as a camelCase JSON object. This module
decodes that payload into a frozen dataclass keyed by `WidgetType`, so each
widget type has its own strict field set, and encodes it back for storage.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Literal, cast, get_args

from .rows import is_number


class WidgetType(StrEnum):
    """Discriminating tag stored on every widget."""

    CHART = "chart"
    TABLE = "table"
    TEXT = "text"
    COUNTER = "counter"


class UnknownWidgetTypeError(ValueError):
    """Raised when a stored widget type tag is not a known WidgetType."""

    def __init__(self, widget_type: object) -> None:
        """Initialize the error.

        Args:
            widget_type: The unrecognized type tag.
        """

        super().__init__(f"Unsupported widget type: {widget_type}")
        self.widget_type = widget_type


ChartType = Literal[
    "bar",
    "column",
    "line",
    "area",
    "pie",
    "scatter",
    "dual-axes",
    "histogram",
    "word-cloud",
]
CHART_TYPES: tuple[str, ...] = get_args(ChartType)

FilterOperator = Literal["equals", "not_equals", "greater_than", "less_than", "contains"]
FILTER_OPERATORS: tuple[str, ...] = get_args(FilterOperator)

SortOrder = Literal["asc", "desc", "none"]
SORT_ORDERS: tuple[str, ...] = get_args(SortOrder)

CounterFormat = Literal["number", "currency", "percentage"]
COUNTER_FORMATS: tuple[str, ...] = get_args(CounterFormat)

# Largest fraction-digit count a counter may request.
MAX_DECIMALS = 100

TextAlign = Literal["left", "center", "right", "justify"]
FontSize = Literal["small", "medium", "large", "xlarge", "2xlarge", "3xlarge", "4xlarge"]
FontWeight = Literal["normal", "medium", "semibold", "bold"]


@dataclass(frozen=True, slots=True)
class NormalizeConfig:
    """Field references used to densify a category x series dataset.

    Args:
        x_field: Category column.
        y_field: Value column (numeric).
        color_field: Series column.
    """

    x_field: str
    y_field: str
    color_field: str


@dataclass(frozen=True, slots=True)
class TableFilter:
    """A single row predicate applied by table widgets."""

    field: str
    operator: str
    value: object = None


@dataclass(frozen=True, slots=True)
class TableWidgetConfig:
    """Configuration for `table` widgets.

    Args:
        headers: Explicit column list; derived from the rows when None.
        limit: Maximum number of rows taken from the original order.
        sort_by: Column to sort by.
        sort_order: Sort direction; "none" leaves order unchanged.
        filters: Conjunction of row predicates.
    """

    headers: tuple[str, ...] | None = None
    limit: int | None = None
    sort_by: str | None = None
    sort_order: SortOrder | None = None
    filters: tuple[TableFilter, ...] = ()


@dataclass(frozen=True, slots=True)
class CounterWidgetConfig:
    """Configuration for `counter` widgets."""

    value_field: str | None = None
    format: str = "number"
    prefix: str = ""
    suffix: str = ""
    decimals: int = 0
    show_icon: bool = True
    icon: str = "trending-up"
    color_code: bool = True
    chart_title: str = ""


@dataclass(frozen=True, slots=True)
class TextWidgetConfig:
    """Configuration for `text` widgets."""

    text_content: str | None = None
    text_align: str = "left"
    font_size: str = "medium"
    font_weight: str = "normal"
    text_color: str | None = None
    background_color: str | None = None


@dataclass(frozen=True, slots=True)
class ChartWidgetConfig:
    """Configuration for `chart` widgets.

    Field-reference options name columns of the widget rows. The `dict`-typed
    options are forwarded verbatim to the client charting library.
    """

    chart_type: str | None = None
    x_field: str | None = None
    y_field: str | None = None
    color_field: str | None = None
    series_field: str | None = None
    size_field: str | None = None
    shape_field: str | None = None
    bin_field: str | None = None
    stack: bool | dict[str, Any] | None = None
    group: bool | dict[str, Any] | None = None
    sort: bool | dict[str, Any] | None = None
    normalize: bool | None = None
    percent: bool | None = None
    inner_radius: float | None = None
    tooltip: bool | None = None
    point: dict[str, Any] | None = None
    interaction: dict[str, Any] | None = None
    style: dict[str, Any] | None = None
    label: dict[str, Any] | None = None
    legend: dict[str, Any] | None = None
    children: tuple[dict[str, Any], ...] | None = None


WidgetConfig = ChartWidgetConfig | TableWidgetConfig | CounterWidgetConfig | TextWidgetConfig


@dataclass(frozen=True, slots=True)
class WidgetConfigValidationResult:
    """Validation result for a stored widget configuration payload.

    Args:
        is_valid: True when no errors exist.
        errors: Fatal validation errors.
        warnings: Non-fatal warnings (e.g. ignored keys).
    """

    is_valid: bool
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()


# (payload key, attribute name) per variant, in encode order.
_CHART_KEYS: tuple[tuple[str, str], ...] = (
    ("chartType", "chart_type"),
    ("xField", "x_field"),
    ("yField", "y_field"),
    ("colorField", "color_field"),
    ("seriesField", "series_field"),
    ("sizeField", "size_field"),
    ("shapeField", "shape_field"),
    ("binField", "bin_field"),
    ("stack", "stack"),
    ("group", "group"),
    ("sort", "sort"),
    ("normalize", "normalize"),
    ("percent", "percent"),
    ("innerRadius", "inner_radius"),
    ("tooltip", "tooltip"),
    ("point", "point"),
    ("interaction", "interaction"),
    ("style", "style"),
    ("label", "label"),
    ("legend", "legend"),
    ("children", "children"),
)
_TABLE_KEYS: tuple[tuple[str, str], ...] = (
    ("headers", "headers"),
    ("limit", "limit"),
    ("sortBy", "sort_by"),
    ("sortOrder", "sort_order"),
    ("filters", "filters"),
)
_COUNTER_KEYS: tuple[tuple[str, str], ...] = (
    ("valueField", "value_field"),
    ("format", "format"),
    ("prefix", "prefix"),
    ("suffix", "suffix"),
    ("decimals", "decimals"),
    ("showIcon", "show_icon"),
    ("icon", "icon"),
    ("colorCode", "color_code"),
    ("chartTitle", "chart_title"),
)
_TEXT_KEYS: tuple[tuple[str, str], ...] = (
    ("textContent", "text_content"),
    ("textAlign", "text_align"),
    ("fontSize", "font_size"),
    ("fontWeight", "font_weight"),
    ("textColor", "text_color"),
    ("backgroundColor", "background_color"),
)
_KEYS_BY_TYPE: dict[WidgetType, tuple[tuple[str, str], ...]] = {
    WidgetType.CHART: _CHART_KEYS,
    WidgetType.TABLE: _TABLE_KEYS,
    WidgetType.COUNTER: _COUNTER_KEYS,
    WidgetType.TEXT: _TEXT_KEYS,
}

# Keys every widget may carry regardless of type (layout hints from the editor).
_SHARED_KEYS = frozenset({"type", "autoFit", "height", "width"})


def parse_widget_type(value: object) -> WidgetType:
    """Parse a stored widget type tag.

    Raises:
        UnknownWidgetTypeError: When the tag is not a known WidgetType.
    """

    try:
        return WidgetType(str(value).strip().lower())
    except ValueError:
        raise UnknownWidgetTypeError(value) from None


def decode_widget_config(widget_type: object, payload: Mapping[str, Any] | None) -> WidgetConfig:
    """Decode a stored configuration payload into its typed variant.

    Decoding is best-effort: scalars of the wrong type fall back to the
    variant's defaults so a half-edited widget still renders.

    Args:
        widget_type: Stored widget type tag.
        payload: JSONField payload (camelCase keys).

    Returns:
        The WidgetConfig variant for `widget_type`.

    Raises:
        UnknownWidgetTypeError: When `widget_type` is not a known WidgetType.
    """

    kind = parse_widget_type(widget_type)
    raw: Mapping[str, Any] = payload if isinstance(payload, Mapping) else {}

    if kind is WidgetType.TABLE:
        sort_order = _parse_str(raw.get("sortOrder"))
        return TableWidgetConfig(
            headers=_parse_str_tuple(raw.get("headers")),
            limit=_parse_int(raw.get("limit")),
            sort_by=_parse_str(raw.get("sortBy")),
            sort_order=cast(SortOrder, sort_order) if sort_order in SORT_ORDERS else None,
            filters=_parse_filters(raw.get("filters")),
        )
    if kind is WidgetType.COUNTER:
        defaults = CounterWidgetConfig()
        return CounterWidgetConfig(
            value_field=_parse_str(raw.get("valueField")),
            format=_parse_str(raw.get("format")) or defaults.format,
            prefix=_parse_str(raw.get("prefix")) or "",
            suffix=_parse_str(raw.get("suffix")) or "",
            decimals=min(max(_parse_int(raw.get("decimals")) or 0, 0), MAX_DECIMALS),
            show_icon=_parse_bool(raw.get("showIcon"), default=defaults.show_icon),
            icon=_parse_str(raw.get("icon")) or defaults.icon,
            color_code=_parse_bool(raw.get("colorCode"), default=defaults.color_code),
            chart_title=_parse_str(raw.get("chartTitle")) or "",
        )
    if kind is WidgetType.TEXT:
        content = raw.get("textContent")
        return TextWidgetConfig(
            text_content=content if isinstance(content, str) else None,
            text_align=_parse_str(raw.get("textAlign")) or "left",
            font_size=_parse_str(raw.get("fontSize")) or "medium",
            font_weight=_parse_str(raw.get("fontWeight")) or "normal",
            text_color=_parse_str(raw.get("textColor")),
            background_color=_parse_str(raw.get("backgroundColor")),
        )
    return ChartWidgetConfig(
        chart_type=_parse_str(raw.get("chartType")),
        x_field=_parse_str(raw.get("xField")),
        y_field=_parse_str(raw.get("yField")),
        color_field=_parse_str(raw.get("colorField")),
        series_field=_parse_str(raw.get("seriesField")),
        size_field=_parse_str(raw.get("sizeField")),
        shape_field=_parse_str(raw.get("shapeField")),
        bin_field=_parse_str(raw.get("binField")),
        stack=_parse_flag_or_options(raw.get("stack")),
        group=_parse_flag_or_options(raw.get("group")),
        sort=_parse_flag_or_options(raw.get("sort")),
        normalize=_parse_optional_bool(raw.get("normalize")),
        percent=_parse_optional_bool(raw.get("percent")),
        inner_radius=_parse_float(raw.get("innerRadius")),
        tooltip=_parse_optional_bool(raw.get("tooltip")),
        point=_parse_options(raw.get("point")),
        interaction=_parse_options(raw.get("interaction")),
        style=_parse_options(raw.get("style")),
        label=_parse_options(raw.get("label")),
        legend=_parse_options(raw.get("legend")),
        children=_parse_children(raw.get("children")),
    )


def encode_widget_config(config: WidgetConfig) -> dict[str, Any]:
    """Encode a typed widget configuration into a JSON-serializable payload.

    Args:
        config: WidgetConfig variant to encode.

    Returns:
        Dict payload safe for JSONField storage; unset (None) options are omitted.
    """

    payload: dict[str, Any] = {}
    for key, attr in _KEYS_BY_TYPE[widget_type_of(config)]:
        value = getattr(config, attr)
        if value is None:
            continue
        if attr == "filters":
            value = [{"field": f.field, "operator": f.operator, "value": f.value} for f in value]
        elif isinstance(value, tuple):
            value = list(value)
        payload[key] = value
    return payload


def widget_type_of(config: WidgetConfig) -> WidgetType:
    """Return the WidgetType tag for a config variant."""

    if isinstance(config, ChartWidgetConfig):
        return WidgetType.CHART
    if isinstance(config, TableWidgetConfig):
        return WidgetType.TABLE
    if isinstance(config, CounterWidgetConfig):
        return WidgetType.COUNTER
    return WidgetType.TEXT


def validate_widget_config(widget_type: object, payload: object) -> WidgetConfigValidationResult:
    """Validate a stored configuration payload against its variant's field set.

    Args:
        widget_type: Stored widget type tag.
        payload: JSONField payload.

    Returns:
        WidgetConfigValidationResult containing errors and warnings.
    """

    errors: list[str] = []
    warnings: list[str] = []

    try:
        kind = parse_widget_type(widget_type)
    except UnknownWidgetTypeError as exc:
        return WidgetConfigValidationResult(is_valid=False, errors=(str(exc),))

    if payload is None:
        payload = {}
    if not isinstance(payload, Mapping):
        return WidgetConfigValidationResult(is_valid=False, errors=("Widget config must be a JSON object.",))

    known = {key for key, _ in _KEYS_BY_TYPE[kind]} | _SHARED_KEYS
    for key in payload:
        if key not in known:
            warnings.append(f"Ignored key for {kind} widget: {key!r}.")

    if kind is WidgetType.TABLE:
        headers = payload.get("headers")
        if headers is not None and (
            not isinstance(headers, list) or not all(isinstance(h, str) for h in headers)
        ):
            errors.append("headers must be a list of column names.")
        limit = payload.get("limit")
        if limit is not None and (not _is_int(limit) or limit < 0):
            errors.append("limit must be a non-negative integer.")
        sort_order = payload.get("sortOrder")
        if sort_order is not None and sort_order not in SORT_ORDERS:
            errors.append(f"sortOrder must be one of {list(SORT_ORDERS)}.")
        filters = payload.get("filters")
        if filters is not None:
            if not isinstance(filters, list):
                errors.append("filters must be a list.")
            else:
                for idx, item in enumerate(filters):
                    if not isinstance(item, Mapping):
                        errors.append(f"filters[{idx}] must be an object.")
                        continue
                    if item.get("operator") not in FILTER_OPERATORS:
                        errors.append(f"filters[{idx}].operator must be one of {list(FILTER_OPERATORS)}.")
    elif kind is WidgetType.COUNTER:
        fmt = payload.get("format")
        if fmt is not None and fmt not in COUNTER_FORMATS:
            errors.append(f"format must be one of {list(COUNTER_FORMATS)}.")
        decimals = payload.get("decimals")
        if decimals is not None and (not _is_int(decimals) or not 0 <= decimals <= MAX_DECIMALS):
            errors.append(f"decimals must be an integer between 0 and {MAX_DECIMALS}.")
        for key in ("showIcon", "colorCode"):
            if key in payload and not isinstance(payload[key], bool):
                errors.append(f"{key} must be a boolean.")
    elif kind is WidgetType.TEXT:
        content = payload.get("textContent")
        if content is not None and not isinstance(content, str):
            errors.append("textContent must be a string.")
    else:
        chart_type = payload.get("chartType")
        if chart_type is not None and chart_type not in CHART_TYPES:
            errors.append(f"chartType must be one of {list(CHART_TYPES)}.")
        for key in ("xField", "yField", "colorField", "seriesField", "sizeField", "shapeField", "binField"):
            value = payload.get(key)
            if value is not None and not isinstance(value, str):
                errors.append(f"{key} must be a column name.")

    return WidgetConfigValidationResult(is_valid=not errors, errors=tuple(errors), warnings=tuple(warnings))


def _is_int(value: object) -> bool:
    """Return True for ints that are not booleans."""

    return isinstance(value, int) and not isinstance(value, bool)


def _parse_str(value: object) -> str | None:
    """Best-effort string parsing; blank strings become None."""

    if value is None or isinstance(value, (Mapping, list, bool)):
        return None
    text = str(value)
    return text if text.strip() else None


def _parse_int(value: object) -> int | None:
    """Best-effort int parsing for config payloads."""

    if value is None or value == "" or isinstance(value, bool):
        return None
    if is_number(value):
        return int(cast(float, value))
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def _parse_float(value: object) -> float | None:
    """Best-effort float parsing for config payloads."""

    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        return float(str(value).strip())
    except ValueError:
        return None


def _parse_bool(value: object, *, default: bool) -> bool:
    """Best-effort bool parsing with a default for missing values."""

    parsed = _parse_optional_bool(value)
    return default if parsed is None else parsed


def _parse_optional_bool(value: object) -> bool | None:
    """Best-effort bool parsing; None when the value is absent or unrecognized."""

    if isinstance(value, bool):
        return value
    if value is None:
        return None
    normalized = str(value).strip().casefold()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    return None


def _parse_str_tuple(value: object) -> tuple[str, ...] | None:
    """Parse a list of column names."""

    if not isinstance(value, (list, tuple)):
        return None
    return tuple(str(item) for item in value if item is not None)


def _parse_options(value: object) -> dict[str, Any] | None:
    """Copy a nested options object for the charting library."""

    if isinstance(value, Mapping):
        return dict(value)
    return None


def _parse_flag_or_options(value: object) -> bool | dict[str, Any] | None:
    """Parse chart options that accept either a boolean or an options object."""

    if isinstance(value, Mapping):
        return dict(value)
    return _parse_optional_bool(value)


def _parse_children(value: object) -> tuple[dict[str, Any], ...] | None:
    """Parse nested child chart definitions (dual-axes charts)."""

    if not isinstance(value, list):
        return None
    return tuple(dict(child) for child in value if isinstance(child, Mapping))


def _parse_filters(value: object) -> tuple[TableFilter, ...]:
    """Parse table filters, keeping entries in their stored order."""

    if not isinstance(value, list):
        return ()
    filters: list[TableFilter] = []
    for item in value:
        if not isinstance(item, Mapping):
            continue
        filters.append(
            TableFilter(
                field=str(item.get("field") or ""),
                operator=str(item.get("operator") or ""),
                value=item.get("value"),
            )
        )
    return tuple(filters)
