"""Create a sample dashboard with one widget of every type.

Useful for trying the render API against a fresh database. The command is
idempotent: widgets are matched by name within the space and updated in place.
"""

from __future__ import annotations

from typing import Any

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from rendering.widget_config import (
    ChartWidgetConfig,
    CounterWidgetConfig,
    TableFilter,
    TableWidgetConfig,
    TextWidgetConfig,
    WidgetConfig,
    encode_widget_config,
    widget_type_of,
)
from workspace.models import Dashboard, DashboardWidget, Space, Widget

MONTHLY_SALES: list[dict[str, Any]] = [
    {"month": "Jan", "region": "North", "sales": 400},
    {"month": "Jan", "region": "South", "sales": 250},
    {"month": "Feb", "region": "North", "sales": 300},
    {"month": "Mar", "region": "North", "sales": 600},
    {"month": "Mar", "region": "South", "sales": 420},
    {"month": "Apr", "region": "South", "sales": 800},
]

ORDERS: list[dict[str, Any]] = [
    {"id": 1, "customer": "Acme", "status": "active", "amount": 120.5},
    {"id": 2, "customer": "Globex", "status": "inactive", "amount": 500},
    {"id": 3, "customer": "Initech", "status": "active", "amount": 80},
    {"id": 4, "customer": "Umbrella", "status": "active", "amount": 310},
]

SAMPLE_WIDGETS: tuple[tuple[str, WidgetConfig, list[dict[str, Any]], dict[str, int]], ...] = (
    (
        "Welcome",
        TextWidgetConfig(text_content="Sample dashboard\nEvery widget type in one place.", font_size="large"),
        [],
        {"x": 0, "y": 0, "w": 12, "h": 1},
    ),
    (
        "Total revenue",
        CounterWidgetConfig(value_field="revenue", format="currency", decimals=2, chart_title="Revenue"),
        [{"revenue": 1234.5}],
        {"x": 0, "y": 1, "w": 3, "h": 2},
    ),
    (
        "Monthly sales by region",
        ChartWidgetConfig(chart_type="area", x_field="month", y_field="sales", color_field="region", stack=True),
        MONTHLY_SALES,
        {"x": 3, "y": 1, "w": 9, "h": 4},
    ),
    (
        "Active orders",
        TableWidgetConfig(
            sort_by="amount",
            sort_order="desc",
            filters=(TableFilter(field="status", operator="equals", value="active"),),
        ),
        ORDERS,
        {"x": 0, "y": 5, "w": 12, "h": 3},
    ),
)


class Command(BaseCommand):
    """Create or refresh sample widgets on a sample dashboard."""

    help = "Create a sample dashboard with chart, table, counter and text widgets (idempotent)."

    def add_arguments(self, parser) -> None:
        """Add command arguments."""

        parser.add_argument("--space", required=True, help="Slug of the target space.")
        parser.add_argument(
            "--dashboard",
            default="Sample dashboard",
            help="Name of the dashboard to create or reuse.",
        )

    def handle(self, *args, **options) -> str | None:
        """Run the command."""

        slug: str = options["space"]
        dashboard_name: str = options["dashboard"]

        space = Space.objects.filter(slug=slug).first()
        if space is None:
            raise CommandError(f"Unknown space slug: {slug!r}.")

        created = 0
        with transaction.atomic():
            dashboard, _ = Dashboard.objects.get_or_create(space=space, name=dashboard_name)
            for name, config, rows, position in SAMPLE_WIDGETS:
                widget = Widget.objects.filter(space=space, name=name).first()
                if widget is None:
                    widget = Widget(space=space, name=name)
                    created += 1
                widget.type = str(widget_type_of(config))
                widget.config = encode_widget_config(config)
                widget.data = rows
                widget.position = position
                widget.save()
                DashboardWidget.objects.update_or_create(
                    dashboard=dashboard,
                    widget=widget,
                    defaults={"position": position},
                )

        self.stdout.write(
            self.style.SUCCESS(
                f"Dashboard {dashboard.name!r} (id={dashboard.pk}): "
                f"{created} created, {len(SAMPLE_WIDGETS) - created} updated."
            )
        )
        return None
