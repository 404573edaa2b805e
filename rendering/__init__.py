"""Pure widget rendering package for BeakDash.

This package turns persisted widget configuration plus already-fetched rows
into presentation DTOs. It must not import Django or perform any I/O.
"""

from .dispatch import render_widget, render_widget_payload

__all__ = ["render_widget", "render_widget_payload"]
