"""Database models for spaces, dashboards and widgets."""

from __future__ import annotations

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models

from rendering.widget_config import WidgetConfig, decode_widget_config, validate_widget_config


def default_widget_position() -> dict[str, int]:
    """Return the default grid position for a new widget."""

    return {"x": 0, "y": 0, "w": 3, "h": 2}


class Space(models.Model):
    """A tenancy boundary containing dashboards and widgets."""

    name = models.CharField(max_length=120)
    slug = models.SlugField(max_length=120, unique=True)
    description = models.TextField(blank=True)
    logo_url = models.URLField(blank=True)
    # Shadows django.conf.settings inside this class body only.
    settings = models.JSONField(default=dict, blank=True)
    is_private = models.BooleanField(default=False)
    is_default = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ("name",)

    def __str__(self) -> str:
        """Return the space name for display contexts."""

        return self.name


class SpaceMembership(models.Model):
    """Join table connecting users to the spaces they can see."""

    class Role(models.TextChoices):
        OWNER = "owner", "Owner"
        ADMIN = "admin", "Admin"
        MEMBER = "member", "Member"

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="space_memberships")
    space = models.ForeignKey(Space, on_delete=models.CASCADE, related_name="memberships")
    role = models.CharField(max_length=20, choices=Role.choices, default=Role.MEMBER)
    joined_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["user", "space"], name="uniq_space_membership")
        ]

    def __str__(self) -> str:
        """Return a concise display string."""

        return f"SpaceMembership(user={self.user_id}, space={self.space_id}, role={self.role})"


class Dashboard(models.Model):
    """An ordered collection of widgets with layout positions."""

    space = models.ForeignKey(Space, on_delete=models.CASCADE, related_name="dashboards")
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="dashboards",
    )
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    is_active = models.BooleanField(default=True)
    layout = models.JSONField(default=dict, blank=True)
    widgets = models.ManyToManyField("Widget", through="DashboardWidget", related_name="dashboards", blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        """Return the dashboard name."""

        return self.name


class Widget(models.Model):
    """A persisted visual unit: a type tag, a config payload and cached rows.

    `config` holds the camelCase payload edited by the widget editor; its
    accepted keys depend on `type` (see `rendering.widget_config`).
    """

    class Type(models.TextChoices):
        CHART = "chart", "Chart"
        TABLE = "table", "Table"
        TEXT = "text", "Text"
        COUNTER = "counter", "Counter"

    space = models.ForeignKey(Space, null=True, blank=True, on_delete=models.CASCADE, related_name="widgets")
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    type = models.CharField(max_length=20, choices=Type.choices)
    config = models.JSONField(default=dict, blank=True)
    data = models.JSONField(default=list, blank=True, help_text="Cached rows rendered by the widget.")
    position = models.JSONField(default=default_widget_position, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        """Return a concise display string."""

        return f"Widget({self.name}, type={self.type})"

    def clean(self) -> None:
        """Validate the config payload and cached rows for the widget type."""

        errors: dict[str, list[str]] = {}
        result = validate_widget_config(self.type, self.config)
        if not result.is_valid:
            errors["config"] = list(result.errors)
        if not isinstance(self.data, list) or not all(isinstance(row, dict) for row in self.data):
            errors["data"] = ["Widget data must be a list of objects."]
        if errors:
            raise ValidationError(errors)

    def save(self, *args, **kwargs) -> None:
        """Save while enforcing config and data invariants."""

        self.full_clean()
        super().save(*args, **kwargs)

    def typed_config(self) -> WidgetConfig:
        """Decode the stored config payload into its typed variant.

        Raises:
            UnknownWidgetTypeError: When the stored type tag is not recognized.
        """

        return decode_widget_config(self.type, self.config)


class DashboardWidget(models.Model):
    """Placement of a widget on a dashboard."""

    dashboard = models.ForeignKey(Dashboard, on_delete=models.CASCADE, related_name="placements")
    widget = models.ForeignKey(Widget, on_delete=models.CASCADE, related_name="placements")
    position = models.JSONField(default=dict, blank=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["dashboard", "widget"], name="uniq_dashboard_widget")
        ]

    def __str__(self) -> str:
        """Return a concise display string."""

        return f"DashboardWidget(dashboard={self.dashboard_id}, widget={self.widget_id})"

    def clean(self) -> None:
        """Reject placing a widget on a dashboard of another space."""

        if self.dashboard_id is None or self.widget_id is None:
            return
        if self.widget.space_id != self.dashboard.space_id:
            raise ValidationError({"widget": ["Widget must belong to the dashboard's space."]})

    def save(self, *args, **kwargs) -> None:
        """Save while enforcing that widget and dashboard share a space."""

        self.full_clean()
        super().save(*args, **kwargs)
