"""Public API for roles management.

A role is a named group of permissions. Instead of granting permissions to each
user, permissions are granted to a role and users inherit the permissions of
their roles.

Functions in this module that change a role's permissions flush the permission
cache themselves, so callers see the change on the next check.
"""

import logging
from collections.abc import Iterable

from django.db import transaction

from roles_authz.models import Permission, Role

__all__ = [
    "get_role",
    "create_role",
    "delete_role",
    "get_permissions_for_role",
    "role_has_permission",
    "assign_permissions_to_role",
]

logger = logging.getLogger(__name__)


def get_role(role_name: str) -> Role:
    """Get a role by its name.

    Args:
        role_name: The name of the role (e.g., 'editor').

    Returns:
        Role: The role.

    Raises:
        Role.DoesNotExist: If no role has that name.
    """
    return Role.objects.get(name=role_name)


def get_permissions_by_name(permission_names: Iterable[str]) -> list[Permission]:
    """Get the permissions with the given names.

    Args:
        permission_names: The permission names to look up.

    Returns:
        list[Permission]: The permissions, ordered by name.

    Raises:
        Permission.DoesNotExist: If any of the names is unknown.
    """
    permission_names = set(permission_names)
    permissions = list(Permission.objects.filter(name__in=permission_names).order_by("name"))
    if missing := permission_names - {permission.name for permission in permissions}:
        raise Permission.DoesNotExist(f"Unknown permissions: {', '.join(sorted(missing))}")
    return permissions


def create_role(
    role_name: str,
    permission_names: Iterable[str] = (),
    display_name: str = "",
    description: str = "",
) -> Role:
    """Create a role granting the given permissions.

    Args:
        role_name: The name of the new role.
        permission_names: Names of existing permissions granted by the role.
        display_name: Human readable name of the role.
        description: Description of the role.

    Returns:
        Role: The created role.

    Raises:
        Permission.DoesNotExist: If any of the permission names is unknown. No
            role is created then.
    """
    permissions = get_permissions_by_name(permission_names)
    with transaction.atomic():
        role = Role.objects.create(name=role_name, display_name=display_name, description=description)
        role.attach_permissions(permissions)
    if permissions:
        role.flush_permissions_cache()
    logger.info(f"Created role {role_name!r} with {len(permissions)} permission(s)")
    return role


def delete_role(role_name: str) -> None:
    """Delete a role with its user and permission assignments.

    Args:
        role_name: The name of the role.
    """
    get_role(role_name).delete()
    logger.info(f"Deleted role {role_name!r}")


def get_permissions_for_role(role_name: str) -> list[Permission]:
    """Get the permissions granted by a role, through the permission cache.

    Args:
        role_name: The name of the role.

    Returns:
        list[Permission]: The permissions of the role.
    """
    return get_role(role_name).cached_permissions()


def role_has_permission(role_name: str, permission_names: str | Iterable[str], require_all: bool = False) -> bool:
    """Check if a role grants a permission, or a list of permissions.

    Args:
        role_name: The name of the role.
        permission_names: A permission name or a list of permission names.
        require_all: For a list, whether every permission is required.

    Returns:
        bool: True if the role grants the permission(s).
    """
    return get_role(role_name).has_permission(permission_names, require_all)


def assign_permissions_to_role(role_name: str, permission_names: Iterable[str]) -> Role:
    """Replace the permissions granted by a role.

    Args:
        role_name: The name of the role.
        permission_names: Names of the permissions the role should grant. An
            empty list removes every permission from the role.

    Returns:
        Role: The updated role.
    """
    role = get_role(role_name)
    role.save_permissions(get_permissions_by_name(permission_names))
    role.flush_permissions_cache()
    return role
