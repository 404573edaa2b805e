"""Table widget transform: limit, sort, filter and cell rendering."""

from __future__ import annotations

from functools import cmp_to_key

from .dto import NO_DATA_MESSAGE, TableView
from .rows import Row, Rows, display_text, extract_columns, is_number
from .widget_config import TableFilter, TableWidgetConfig


def render_table(rows: Rows | None, config: TableWidgetConfig | None = None) -> TableView:
    """Derive the displayed rows of a table widget.

    Steps run in a fixed order: limit (original row order), then sort, then
    filter. Filtering after limiting means a table can show fewer than
    `limit` rows even when more rows match.

    Args:
        rows: Widget rows.
        config: Table configuration; defaults apply when None.

    Returns:
        TableView with columns, kept rows and their display cells.
    """

    if not rows:
        return TableView(columns=(), rows=(), cells=(), empty=True, message=NO_DATA_MESSAGE)

    config = config or TableWidgetConfig()
    columns = config.headers if config.headers is not None else extract_columns(rows)

    limited = list(rows[: config.limit]) if config.limit else list(rows)
    ordered = sort_rows(limited, sort_by=config.sort_by, sort_order=config.sort_order)
    kept = [row for row in ordered if row_matches(row, config.filters)]

    return TableView(
        columns=tuple(columns),
        rows=tuple(dict(row) for row in kept),
        cells=tuple(tuple(display_text(row.get(column)) for column in columns) for row in kept),
    )


def sort_rows(rows: list[Row], *, sort_by: str | None, sort_order: str | None) -> list[Row]:
    """Sort rows by one column.

    The comparator never reports a tie: "asc" returns 1 when a > b and -1
    otherwise, "desc" returns 1 when a < b and -1 otherwise. The relative
    order of equal values is therefore unspecified, as is the order of
    values that cannot be compared with each other.
    """

    if not sort_by or sort_order not in ("asc", "desc"):
        return list(rows)

    def compare(a: Row, b: Row) -> int:
        left, right = a.get(sort_by), b.get(sort_by)
        if sort_order == "asc":
            return 1 if _greater(left, right) else -1
        return 1 if _less(left, right) else -1

    return sorted(rows, key=cmp_to_key(compare))


def row_matches(row: Row, filters: tuple[TableFilter, ...]) -> bool:
    """Return True when the row satisfies every filter."""

    return all(_filter_matches(row, item) for item in filters)


def _filter_matches(row: Row, item: TableFilter) -> bool:
    if not item.field:
        return True
    value = row.get(item.field)
    operator = item.operator
    if operator == "equals":
        return _strict_equal(value, item.value)
    if operator == "not_equals":
        return not _strict_equal(value, item.value)
    if operator == "greater_than":
        return _greater(value, item.value)
    if operator == "less_than":
        return _less(value, item.value)
    if operator == "contains":
        return display_text(item.value).lower() in display_text(value).lower()
    return True


def _strict_equal(left: object, right: object) -> bool:
    """Equality without coercion: booleans never equal numbers, "5" != 5."""

    if isinstance(left, bool) or isinstance(right, bool):
        return type(left) is type(right) and left == right
    if is_number(left) and is_number(right):
        return left == right
    if type(left) is not type(right):
        return False
    return left == right


def _coerce_pair(left: object, right: object) -> tuple[object, object]:
    """Coerce a numeric string to a number when compared against a number."""

    if is_number(left) and isinstance(right, str):
        return left, _number_or_none(right)
    if isinstance(left, str) and is_number(right):
        return _number_or_none(left), right
    return left, right


def _number_or_none(text: str) -> float | None:
    try:
        return float(text.strip())
    except ValueError:
        return None


def _greater(left: object, right: object) -> bool:
    left, right = _coerce_pair(left, right)
    try:
        return bool(left > right)  # type: ignore[operator]
    except TypeError:
        return False


def _less(left: object, right: object) -> bool:
    left, right = _coerce_pair(left, right)
    try:
        return bool(left < right)  # type: ignore[operator]
    except TypeError:
        return False
