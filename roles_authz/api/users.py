"""Public API for user role assignments and permission checks.

A user holds a permission when any of its roles grants it. Lists of names are
checked with the same any/all semantics as role checks.
"""

from collections.abc import Iterable

from roles_authz.api.roles import get_role
from roles_authz.engine.evaluator import PermissionEvaluator
from roles_authz.models import Role

__all__ = [
    "get_roles_for_user",
    "assign_role_to_user",
    "unassign_role_from_user",
    "user_has_role",
    "user_has_permission",
]


def get_roles_for_user(user) -> list[Role]:
    """Get the roles assigned to a user.

    Args:
        user: A user instance. Anonymous users have no roles.

    Returns:
        list[Role]: The roles of the user, ordered by name.
    """
    if not user.is_authenticated:
        return []
    return list(Role.objects.filter(users=user).order_by("name"))


def assign_role_to_user(user, role_name: str) -> None:
    """Assign a role to a user.

    Args:
        user: A saved user instance.
        role_name: The name of the role.
    """
    get_role(role_name).users.add(user)


def unassign_role_from_user(user, role_name: str) -> None:
    """Unassign a role from a user.

    Args:
        user: A saved user instance.
        role_name: The name of the role.
    """
    get_role(role_name).users.remove(user)


def user_has_role(user, role_names: str | Iterable[str], require_all: bool = False) -> bool:
    """Check if a user has a role, or a list of roles.

    Args:
        user: A user instance.
        role_names: A role name or a list of role names.
        require_all: For a list, whether every role is required.

    Returns:
        bool: True if the user has the role(s).
    """
    assigned = {role.name for role in get_roles_for_user(user)}
    if isinstance(role_names, str):
        return role_names in assigned

    return PermissionEvaluator.combine(role_names, assigned.__contains__, require_all)


def user_has_permission(user, permission_names: str | Iterable[str], require_all: bool = False) -> bool:
    """Check if a user holds a permission, or a list of permissions, through its roles.

    Args:
        user: A user instance.
        permission_names: A permission name or a list of permission names.
        require_all: For a list, whether every permission is required.

    Returns:
        bool: True if the user's roles grant the permission(s).
    """
    roles = get_roles_for_user(user)
    evaluator = PermissionEvaluator()

    def has_single_permission(permission_name: str) -> bool:
        return any(evaluator.has_permission(role, permission_name) for role in roles)

    if isinstance(permission_names, str):
        return has_single_permission(permission_names)

    return PermissionEvaluator.combine(permission_names, has_single_permission, require_all)
