"""Text widget transform."""

from __future__ import annotations

from .dto import TextView
from .widget_config import TextWidgetConfig

NO_CONTENT_MESSAGE = "No content available"

FONT_SIZE_CLASSES: dict[str, str] = {
    "small": "text-sm",
    "medium": "text-base",
    "large": "text-lg",
    "xlarge": "text-xl",
    "2xlarge": "text-2xl",
    "3xlarge": "text-3xl",
    "4xlarge": "text-4xl",
}
FONT_WEIGHT_CLASSES: dict[str, str] = {
    "normal": "font-normal",
    "medium": "font-medium",
    "semibold": "font-semibold",
    "bold": "font-bold",
}
TEXT_ALIGN_CLASSES: dict[str, str] = {
    "left": "text-left",
    "center": "text-center",
    "right": "text-right",
    "justify": "text-justify",
}


def render_text(config: TextWidgetConfig | None = None) -> TextView:
    """Split text content into lines and map presentation options to classes.

    Unknown alignment, size or weight values fall back to left/medium/normal.
    """

    config = config or TextWidgetConfig()
    classes = (
        TEXT_ALIGN_CLASSES.get(config.text_align, "text-left"),
        FONT_SIZE_CLASSES.get(config.font_size, "text-base"),
        FONT_WEIGHT_CLASSES.get(config.font_weight, "font-normal"),
    )
    style: dict[str, str] = {}
    if config.text_color:
        style["color"] = config.text_color
    if config.background_color:
        style["backgroundColor"] = config.background_color

    if not config.text_content:
        return TextView(lines=(), classes=classes, style=style, empty=True, message=NO_CONTENT_MESSAGE)
    return TextView(lines=tuple(config.text_content.split("\n")), classes=classes, style=style)
