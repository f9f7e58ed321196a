"""Admin configuration for roles_authz."""

from django.apps import apps
from django.contrib import admin

from roles_authz.models import Permission, Role, RoleMixin


class RoleInline(admin.TabularInline):
    """Inline admin listing the roles granting a permission."""

    model = Role.permissions.through
    extra = 0
    verbose_name = "Role"
    verbose_name_plural = "Roles"


@admin.register(Permission)
class PermissionAdmin(admin.ModelAdmin):
    """Admin for Permission."""

    list_display = ("id", "name", "display_name", "updated_at")
    search_fields = ("name", "display_name", "description")
    readonly_fields = ("created_at", "updated_at")
    inlines = [RoleInline]

    def save_related(self, request, form, formsets, change):
        """Save the role inlines, then flush the cached permissions of every role model.

        A permission may be granted by roles of any model built on RoleMixin, and
        models sharing a tag are flushed once.
        """
        super().save_related(request, form, formsets, change)
        flushed_tags = set()
        for model in apps.get_models():
            if not issubclass(model, RoleMixin):
                continue
            tag = model.get_permission_role_tag()
            if tag not in flushed_tags:
                model.get_permission_cache().invalidate()
                flushed_tags.add(tag)


@admin.register(Role)
class RoleAdmin(admin.ModelAdmin):
    """Admin for Role."""

    list_display = ("id", "name", "display_name", "updated_at")
    search_fields = ("name", "display_name", "description")
    filter_horizontal = ("permissions", "users")
    readonly_fields = ("created_at", "updated_at")

    def save_related(self, request, form, formsets, change):
        """Save the many-to-many fields, then flush the cached role permissions.

        The role itself is saved (and the cache flushed) before its many-to-many
        fields are written, so the cache is flushed again once they are.
        """
        super().save_related(request, form, formsets, change)
        form.instance.flush_permissions_cache()
