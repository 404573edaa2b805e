"""Row and column helpers shared by the widget transforms.

Rows come from query results or static datasets and are treated as
immutable: helpers that change values return new row dictionaries.
"""

from __future__ import annotations

import json
import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

Row = Mapping[str, object]
Rows = Sequence[Row]


@dataclass(frozen=True, slots=True)
class ColumnClasses:
    """Columns of a dataset split by the kind of value they hold.

    Args:
        string: Columns whose first value is not numeric-like.
        numeric: Columns whose first value is numeric-like.
        all: String columns followed by numeric columns.
    """

    string: tuple[str, ...]
    numeric: tuple[str, ...]
    all: tuple[str, ...]


def is_number(value: object) -> bool:
    """Return True for int/float values (booleans are not numbers)."""

    return isinstance(value, (int, float)) and not isinstance(value, bool)


def extract_columns(rows: Rows | None) -> tuple[str, ...]:
    """Collect the distinct keys of all rows in order of first appearance.

    Args:
        rows: Input rows.

    Returns:
        Column names, first-seen order across rows.
    """

    seen: dict[str, None] = {}
    for row in rows or ():
        for key in row:
            seen.setdefault(key, None)
    return tuple(seen)


def classify_columns(rows: Rows | None) -> ColumnClasses:
    """Split the columns of the first row into string and numeric columns.

    Numeric-like follows number coercion rules of the chart layer: numbers,
    numeric strings, empty strings, null and booleans all coerce to a number.
    """

    if not rows:
        return ColumnClasses(string=(), numeric=(), all=())

    first = rows[0]
    string: list[str] = []
    numeric: list[str] = []
    for key, value in first.items():
        if _to_number(value) is not None:
            numeric.append(key)
        else:
            string.append(key)
    return ColumnClasses(string=tuple(string), numeric=tuple(numeric), all=(*string, *numeric))


def ensure_numeric(rows: Rows | None) -> list[dict[str, object]]:
    """Return copies of `rows` with numeric-like columns coerced to numbers.

    Values in a numeric column that cannot be coerced become None.
    """

    if not rows:
        return []
    numeric = classify_columns(rows).numeric
    coerced: list[dict[str, object]] = []
    for row in rows:
        copy = dict(row)
        for key in numeric:
            if key in copy:
                copy[key] = _to_number(copy[key])
        coerced.append(copy)
    return coerced


def display_text(value: object) -> str:
    """Render a single cell value as display text.

    Mappings and sequences (other than strings) are JSON-serialized, None
    renders as an empty string and booleans render as `true`/`false`.
    """

    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (Mapping, list, tuple)):
        return json.dumps(value, default=str, separators=(",", ":"))
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _to_number(value: object) -> int | float | None:
    """Coerce a value to a number, returning None when it is not numeric-like."""

    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return None if math.isnan(value) else value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        try:
            number = float(text)
        except ValueError:
            return None
        if math.isnan(number):
            return None
        if number.is_integer() and math.isfinite(number) and "." not in text and "e" not in text.lower():
            return int(number)
        return number
    return None
