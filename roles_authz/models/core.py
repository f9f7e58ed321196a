"""Core models for role and permission management.

A role owns a set of permissions through a many-to-many relation. Permission
checks read the role's permissions through a cache which is flushed whenever a
role is saved, deleted or restored.
"""

import logging
from collections.abc import Iterable
from typing import Any

from django.conf import settings
from django.db import models, transaction
from django.utils import timezone

from roles_authz.engine.cache import PermissionCache, get_permission_cache
from roles_authz.engine.evaluator import PermissionEvaluator
from roles_authz.engine.references import PermissionKey

logger = logging.getLogger(__name__)


class Permission(models.Model):
    """A named capability that can be granted to roles.

    .. no_pii:
    """

    name = models.CharField(max_length=255, unique=True)
    display_name = models.CharField(max_length=255, blank=True, default="")
    description = models.TextField(blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.name


class RoleMixin(models.Model):
    """Base model for roles granting a bundle of permissions to users.

    Subclasses get the `permissions` and `users` many-to-many relations, cached
    permission checks and the permission mutators.

    Note:
        The attach/detach mutators do not flush the permission cache. Call
        flush_permissions_cache() (or save the role) after changing the
        permissions outside of a save.
    """

    name = models.CharField(max_length=255, unique=True)
    display_name = models.CharField(max_length=255, blank=True, default="")
    description = models.TextField(blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    permissions = models.ManyToManyField(
        "roles_authz.Permission",
        related_name="%(class)ss",
        blank=True,
    )
    users = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        related_name="authz_%(class)ss",
        blank=True,
    )

    class Meta:
        abstract = True

    def __str__(self):
        return self.name

    @classmethod
    def get_permission_role_tag(cls) -> str:
        """Get the tag grouping the cached permissions of this role model.

        Returns:
            str: The `ROLES_AUTHZ_PERMISSION_ROLE_TABLE` setting if set, else the
            name of the role-permission join table.
        """
        return getattr(settings, "ROLES_AUTHZ_PERMISSION_ROLE_TABLE", None) or cls.permissions.through._meta.db_table

    @classmethod
    def get_permission_cache(cls) -> PermissionCache:
        """Get the permission cache of this role model.

        Entries are namespaced by the model label, as several role models may
        share one tag or one process-local store.
        """
        return get_permission_cache(cls.get_permission_role_tag(), cls._meta.label_lower)

    def cached_permissions(self) -> list[Permission]:
        """Get the permissions of this role through the permission cache.

        Returns:
            list[Permission]: The permissions, empty if the role has none.
        """
        return self.get_permission_cache().get(self)

    def flush_permissions_cache(self) -> None:
        """Flush the cached permissions of all roles sharing this role's tag."""
        self.get_permission_cache().invalidate()

    def has_permission(self, name: str | Iterable[str], require_all: bool = False) -> bool:
        """Check if the role has a permission by its name.

        Args:
            name: Permission name or list of permission names.
            require_all: All permissions in the list are required.

        Returns:
            bool: True if the role has the permission(s).
        """
        return PermissionEvaluator().has_permission(self, name, require_all)

    def save(self, *args, **kwargs):
        """Save the role, then flush the permission cache.

        The cache is only flushed once the write returned; a failing write raises
        and leaves the cache untouched.
        """
        super().save(*args, **kwargs)
        self.flush_permissions_cache()

    def delete(self, *args, **kwargs):
        """Delete the role with its user and permission associations, then flush the permission cache."""
        with transaction.atomic():
            self.clear_associations()
            result = super().delete(*args, **kwargs)

        self.flush_permissions_cache()
        return result

    def clear_associations(self) -> None:
        """Remove every user and permission association of the role."""
        logger.debug(f"Clearing user and permission associations of role {self.name!r}")
        self.users.clear()
        self.permissions.clear()

    def attach_permission(self, permission: Any) -> None:
        """Attach a permission to the role.

        Args:
            permission: A permission primary key, a Permission or a mapping with an "id" entry.

        Raises:
            InvalidPermissionReference: If the permission reference is malformed.
        """
        self.permissions.add(PermissionKey.from_reference(permission).value)

    def detach_permission(self, permission: Any) -> None:
        """Detach a permission from the role.

        Args:
            permission: A permission primary key, a Permission or a mapping with an "id" entry.

        Raises:
            InvalidPermissionReference: If the permission reference is malformed.
        """
        self.permissions.remove(PermissionKey.from_reference(permission).value)

    def attach_permissions(self, permissions: Iterable[Any]) -> None:
        """Attach multiple permissions to the role."""
        for permission in permissions:
            self.attach_permission(permission)

    def detach_permissions(self, permissions: Iterable[Any] | None = None) -> None:
        """Detach multiple permissions from the role.

        Args:
            permissions: The permissions to detach. When empty or None, every
                permission currently attached in the database is detached.
        """
        if not permissions:
            permissions = list(self.permissions.all())

        for permission in permissions:
            self.detach_permission(permission)

    def save_permissions(self, permissions: Iterable[Any] | None = None) -> None:
        """Replace the permissions of the role.

        Args:
            permissions: The complete new set of permissions. When empty or None,
                every permission is detached.
        """
        if permissions:
            self.permissions.set([PermissionKey.from_reference(permission).value for permission in permissions])
        else:
            self.permissions.clear()


class SoftDeletableRoleQuerySet(models.QuerySet):
    """QuerySet for soft deletable roles."""

    def active(self):
        return self.filter(deleted_at__isnull=True)

    def deleted(self):
        return self.filter(deleted_at__isnull=False)


class SoftDeletableRoleMixin(RoleMixin):
    """Base model for roles that are marked as deleted instead of being removed.

    Deleting keeps the role's user and permission associations so the role can
    be restored as it was.
    """

    deleted_at = models.DateTimeField(null=True, blank=True, db_index=True)

    objects = SoftDeletableRoleQuerySet.as_manager()

    class Meta:
        abstract = True

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def delete(self, *args, **kwargs):  # pylint: disable=unused-argument
        """Mark the role as deleted, then flush the permission cache.

        Returns:
            tuple: The number of roles marked and the count per model, as Model.delete() returns.
        """
        self.deleted_at = timezone.now()
        self.save(update_fields=["deleted_at", "updated_at"])
        return 1, {self._meta.label: 1}

    def restore(self) -> bool:
        """Undo a soft delete, then flush the permission cache.

        Returns:
            bool: True if the role was restored, False if it was not deleted.
        """
        if not self.is_deleted:
            return False

        self.deleted_at = None
        self.save(update_fields=["deleted_at", "updated_at"])
        return True


class Role(RoleMixin):
    """A role removed from the database, with its associations, when deleted.

    .. no_pii:
    """
