"""Counter widget transform: value selection, formatting and polarity."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Context, Decimal

from .dto import NO_DATA_MESSAGE, CounterView, Polarity
from .rows import Rows, display_text, is_number
from .widget_config import MAX_DECIMALS, CounterWidgetConfig

POSITIVE_COLOR_CLASS = "text-green-500"
NEGATIVE_COLOR_CLASS = "text-red-500"
NEUTRAL_COLOR_CLASS = "text-gray-500"

ICON_OVERRIDES = frozenset({"dollar", "percent"})


def format_value(
    value: float,
    format: str = "number",
    decimals: int = 0,
    prefix: str = "",
    suffix: str = "",
) -> str:
    """Format a numeric counter value.

    Args:
        value: Number to format.
        format: "currency" (USD), "percentage", or anything else for a plain number.
        decimals: Fraction digits.
        prefix: Prepended unless `format` is "currency".
        suffix: Appended unless `format` is "currency" or "percentage".

    Returns:
        Display text, e.g. "$1,234.50", "42.6%" or "1,235".
    """

    decimals = min(max(int(decimals), 0), MAX_DECIMALS)
    if not math.isfinite(value):
        return f"{prefix}{value}{suffix}"
    negative = math.copysign(1.0, value) < 0
    if format == "currency":
        amount = _grouped(abs(value), decimals)
        return f"-${amount}" if negative else f"${amount}"
    if format == "percentage":
        return f"{prefix}{_fixed(value, decimals)}%"
    text = _grouped(abs(value), decimals)
    if negative:
        text = f"-{text}"
    return f"{prefix}{text}{suffix}"


def render_counter(rows: Rows | None, config: CounterWidgetConfig | None = None) -> CounterView:
    """Render the first row of `rows` as a single formatted value.

    When `config.value_field` is unset the first numeric column of the first
    row is used. Without any numeric column the value is 0.
    """

    config = config or CounterWidgetConfig()
    if not rows:
        return CounterView(display_value="", title=config.chart_title, empty=True, message=NO_DATA_MESSAGE)

    first = rows[0]
    value_field = config.value_field or next((key for key, v in first.items() if is_number(v)), "")
    value: object = first.get(value_field) if value_field else 0

    polarity: Polarity | None = None
    icon = "trending-up"
    color_class: str | None = None
    if is_number(value):
        try:
            number = float(value)  # type: ignore[arg-type]
        except OverflowError:
            # JSON ints beyond float range display as infinity.
            number = math.inf if value > 0 else -math.inf  # type: ignore[operator]
        polarity = "positive" if number > 0 else "negative" if number < 0 else "zero"
        if config.color_code and polarity == "positive":
            icon, color_class = "trending-up", POSITIVE_COLOR_CLASS
        elif config.color_code and polarity == "negative":
            icon, color_class = "trending-down", NEGATIVE_COLOR_CLASS
        else:
            icon = "minus"
            color_class = NEUTRAL_COLOR_CLASS if config.color_code else None
        display = format_value(number, config.format, config.decimals, config.prefix, config.suffix)
    else:
        display = display_text(value)

    if config.icon in ICON_OVERRIDES:
        icon = config.icon

    return CounterView(
        display_value=display,
        value=value,
        label=value_field,
        polarity=polarity,
        icon=icon if config.show_icon else None,
        color_class=color_class,
        title=config.chart_title,
    )


def _grouped(value: float, decimals: int) -> str:
    """Group thousands after rounding half away from zero on the decimal text."""

    rounded = _quantize(Decimal(repr(value)), decimals)
    return f"{rounded:,.{decimals}f}"


def _fixed(value: float, decimals: int) -> str:
    """Fixed-point text rounded on the exact binary value.

    Negative values that round to zero keep their sign ("-0.0"); zero itself
    never does.
    """

    rounded = _quantize(Decimal(value), decimals)
    if value == 0:
        rounded = abs(rounded)
    return f"{rounded:.{decimals}f}"


def _quantize(amount: Decimal, decimals: int) -> Decimal:
    """Round to `decimals` fraction digits with a precision wide enough for the result."""

    precision = max(28, max(amount.adjusted(), 0) + decimals + 2)
    return amount.quantize(
        Decimal(1).scaleb(-decimals),
        rounding=ROUND_HALF_UP,
        context=Context(prec=precision),
    )
