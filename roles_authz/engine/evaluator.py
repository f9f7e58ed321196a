"""
Permission checks over the cached permissions of a role.

Usage:
    from roles_authz.engine.evaluator import PermissionEvaluator
    allowed = PermissionEvaluator().has_permission(role, ["edit", "publish"], require_all=True)
"""

from collections.abc import Callable, Iterable

from roles_authz.engine.cache import PermissionCache


class PermissionEvaluator:
    """Evaluate whether roles hold permissions, by name.

    Attributes:
        cache (PermissionCache | None): The cache to read permissions from. When None,
            each role's own permission cache is used.
    """

    def __init__(self, cache: PermissionCache | None = None):
        self.cache = cache

    def get_permissions(self, role) -> list:
        """Get the cached permissions of a role.

        Args:
            role: A saved role instance.

        Returns:
            list[Permission]: The role's permissions.
        """
        cache = self.cache if self.cache is not None else role.get_permission_cache()
        return cache.get(role)

    def has_permission(self, role, name: str | Iterable[str], require_all: bool = False) -> bool:
        """Check if a role has a permission, or a list of permissions.

        Args:
            role: A saved role instance.
            name: A permission name, or a list of permission names.
            require_all: For a list, whether every name is required (otherwise any one is enough).

        Returns:
            bool: For a single name, True if the role has a permission with exactly that name.
            For a list, the any/all combination of the single-name checks; an empty list
            returns require_all.
        """
        if isinstance(name, str):
            return any(permission.name == name for permission in self.get_permissions(role))

        return self.combine(name, lambda permission_name: self.has_permission(role, permission_name), require_all)

    @staticmethod
    def combine(names: Iterable[str], check: Callable[[str], bool], require_all: bool) -> bool:
        """Combine per-name checks with any (OR) or all (AND) semantics.

        Evaluation stops at the first name that decides the result.

        Args:
            names: The names to check.
            check: Single-name predicate.
            require_all: True for AND, False for OR.

        Returns:
            bool: The combined result. When no name decides it (including an empty
            list), require_all is returned: all names were found for AND, none for OR.
        """
        for permission_name in names:
            found = check(permission_name)
            if found and not require_all:
                return True
            if not found and require_all:
                return False

        return require_all
