"""Admin registrations for workspace models."""

from __future__ import annotations

from django.contrib import admin
from django.db.models import QuerySet

from workspace.models import Dashboard, DashboardWidget, Space, SpaceMembership, Widget
from workspace.services import can_manage_space, spaces_for_user


class SpaceScopedAdmin(admin.ModelAdmin):
    """ModelAdmin that limits non-superusers to objects in their spaces."""

    space_field_name = "space"

    def get_queryset(self, request) -> QuerySet:
        """Return a queryset scoped to the spaces the user belongs to."""

        qs = super().get_queryset(request)
        if request.user.is_superuser:
            return qs
        return qs.filter(**{f"{self.space_field_name}__in": spaces_for_user(request.user)})

    def formfield_for_foreignkey(self, db_field, request, **kwargs):  # type: ignore[override]
        """Offer only the user's own spaces when assigning ownership."""

        if db_field.name == self.space_field_name and not request.user.is_superuser:
            kwargs["queryset"] = spaces_for_user(request.user)
        return super().formfield_for_foreignkey(db_field, request, **kwargs)


def _may_manage(request, space: Space | None) -> bool:
    """Return True when no space is given or the user manages it."""

    return space is None or can_manage_space(request.user, space)


class SpaceMembershipInline(admin.TabularInline):
    """Inline editor for space members; only owners and admins may edit it."""

    model = SpaceMembership
    extra = 0
    autocomplete_fields = ("user",)

    def has_add_permission(self, request, obj=None) -> bool:
        """Allow adding members only to spaces the user manages."""

        return super().has_add_permission(request, obj) and _may_manage(request, obj)

    def has_change_permission(self, request, obj=None) -> bool:
        """Allow changing roles only in spaces the user manages."""

        return super().has_change_permission(request, obj) and _may_manage(request, obj)

    def has_delete_permission(self, request, obj=None) -> bool:
        """Allow removing members only from spaces the user manages."""

        return super().has_delete_permission(request, obj) and _may_manage(request, obj)


@admin.register(Space)
class SpaceAdmin(admin.ModelAdmin):
    """Admin configuration for Space."""

    list_display = ("name", "slug", "is_private", "is_default", "created_at")
    search_fields = ("name", "slug")
    prepopulated_fields = {"slug": ("name",)}
    inlines = (SpaceMembershipInline,)

    def get_queryset(self, request) -> QuerySet:
        """Return only spaces the user belongs to (all for superusers)."""

        return spaces_for_user(request.user)

    def has_change_permission(self, request, obj=None) -> bool:
        """Restrict editing a space to its owners and admins."""

        return super().has_change_permission(request, obj) and _may_manage(request, obj)

    def has_delete_permission(self, request, obj=None) -> bool:
        """Restrict deleting a space to its owners and admins."""

        return super().has_delete_permission(request, obj) and _may_manage(request, obj)


class DashboardWidgetInline(admin.TabularInline):
    """Inline editor for widget placements on a dashboard."""

    model = DashboardWidget
    extra = 0
    autocomplete_fields = ("widget",)


@admin.register(Dashboard)
class DashboardAdmin(SpaceScopedAdmin):
    """Admin configuration for Dashboard."""

    list_display = ("name", "space", "owner", "is_active", "updated_at")
    list_filter = ("is_active", "space")
    search_fields = ("name", "description")
    inlines = (DashboardWidgetInline,)


@admin.register(Widget)
class WidgetAdmin(SpaceScopedAdmin):
    """Admin configuration for Widget."""

    list_display = ("name", "type", "space", "updated_at")
    list_filter = ("type", "space")
    search_fields = ("name", "description")
