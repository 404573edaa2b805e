"""Densify sparse category x series datasets for grouped and stacked charts.

Stacked and grouped charts render incorrectly when a category is missing one
of the series. `normalize_rows` expands the rows into the full grid of
observed x values times observed series values, filling gaps with zero.
"""

from __future__ import annotations

from collections.abc import Hashable

from .rows import Row, Rows
from .widget_config import NormalizeConfig


def normalize_rows(rows: Rows | None, config: NormalizeConfig | None) -> Rows | None:
    """Expand `rows` so every (x, series) combination is present.

    Args:
        rows: Input rows.
        config: Field references; all three must be non-empty.

    Returns:
        `rows` itself when it is empty or the config is incomplete; otherwise a
        new list of exactly |X| x |C| rows keyed x, color, y. Distinct values
        keep first-seen order, so already-dense input is returned unchanged.
    """

    if not rows or config is None:
        return rows
    if not config.x_field or not config.y_field or not config.color_field:
        return rows

    x_values: dict[Hashable, object] = {}
    color_values: dict[Hashable, object] = {}
    index: dict[tuple[Hashable, Hashable], Row] = {}
    for row in rows:
        x_key = _value_key(row.get(config.x_field))
        color_key = _value_key(row.get(config.color_field))
        x_values.setdefault(x_key, row.get(config.x_field))
        color_values.setdefault(color_key, row.get(config.color_field))
        index.setdefault((x_key, color_key), row)

    normalized: list[dict[str, object]] = []
    for x_key, x_value in x_values.items():
        for color_key, color_value in color_values.items():
            match = index.get((x_key, color_key))
            normalized.append(
                {
                    config.x_field: x_value,
                    config.color_field: color_value,
                    config.y_field: match.get(config.y_field) if match is not None else 0,
                }
            )
    return normalized


def _value_key(value: object) -> Hashable:
    """Return an identity key for a cell value.

    Booleans never collide with 0/1, and unhashable values (objects, lists)
    are distinct per instance.
    """

    if isinstance(value, bool):
        return ("bool", value)
    try:
        hash(value)
    except TypeError:
        return ("object", id(value))
    return ("value", value)
