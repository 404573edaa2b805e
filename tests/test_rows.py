"""Unit tests for row and column helpers."""

from __future__ import annotations

import pytest

from rendering.rows import classify_columns, display_text, ensure_numeric, extract_columns, is_number

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(("value", "expected"), [(1, True), (1.5, True), (True, False), ("1", False), (None, False)])
def test_is_number_excludes_booleans(value, expected: bool) -> None:
    assert is_number(value) is expected


def test_extract_columns_unions_keys_in_first_seen_order() -> None:
    assert extract_columns([{"b": 1}, {"a": 2, "b": 3}, {"c": 4}]) == ("b", "a", "c")
    assert extract_columns(None) == ()


def test_classify_columns_uses_first_row() -> None:
    """Numeric strings, blanks, nulls and booleans count as numeric-like."""

    rows = [{"name": "x", "count": "12", "blank": "", "missing": None, "flag": True, "ratio": 0.5}]
    classes = classify_columns(rows)

    assert classes.string == ("name",)
    assert classes.numeric == ("count", "blank", "missing", "flag", "ratio")
    assert classes.all == ("name", "count", "blank", "missing", "flag", "ratio")


def test_classify_columns_empty() -> None:
    classes = classify_columns([])
    assert classes.all == ()


def test_ensure_numeric_coerces_copies() -> None:
    """Numeric columns become numbers; uncoercible values become None."""

    rows = [{"label": "a", "v": "10"}, {"label": "b", "v": "x"}, {"label": "c", "v": "2.5"}]
    result = ensure_numeric(rows)

    assert result == [{"label": "a", "v": 10}, {"label": "b", "v": None}, {"label": "c", "v": 2.5}]
    assert rows[0]["v"] == "10"


def test_ensure_numeric_empty() -> None:
    assert ensure_numeric(None) == []


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, ""),
        (True, "true"),
        (False, "false"),
        ({"a": [1, 2]}, '{"a":[1,2]}'),
        ([1, "x"], '[1,"x"]'),
        (3.0, "3"),
        (2.25, "2.25"),
        ("text", "text"),
    ],
)
def test_display_text(value, expected: str) -> None:
    assert display_text(value) == expected
