"""Test utilities for creating roles and permissions with a clean permission cache."""

from django.core.cache import cache
from django.test import TestCase

from roles_authz.engine.cache import LocalCacheClient
from roles_authz.models import Permission, Role


def make_permissions(*names: str) -> list[Permission]:
    """Create permissions with the given names.

    Args:
        names: Permission names (e.g., 'edit', 'publish')

    Returns:
        list[Permission]: The created permissions, in the given order.
    """
    return [Permission.objects.create(name=name, display_name=name.title()) for name in names]


def make_role(name: str, permissions=(), model=Role):
    """Create a role granting the given permissions.

    Args:
        name: The role name (e.g., 'editor')
        permissions: Permissions attached to the role.
        model: The role model to create.

    Returns:
        The created role.
    """
    role = model.objects.create(name=name)
    role.attach_permissions(permissions)
    return role


def clear_permission_caches():
    """Empty the shared cache and the process-local permission store."""
    cache.clear()
    LocalCacheClient().cache.clear()


class RolesTestCase(TestCase):
    """Base test case starting every test with empty permission caches.

    Database rows are rolled back between tests and primary keys are reused, so
    entries cached by a previous test must not leak into the next one.
    """

    def setUp(self):
        super().setUp()
        clear_permission_caches()
        self.addCleanup(clear_permission_caches)
