"""Decorators for Django REST framework views protected by role permissions."""

from functools import wraps


def role_permissions(permissions: list[str], require_all: bool = False):
    """Decorator to attach required permissions to view methods.

    This decorator stores the permission names that RolePermission checks
    against the roles of the request user.

    Args:
        permissions: List of permission names (e.g., ["edit", "publish"]).
        require_all: Whether every permission is required (otherwise any one is enough).

    Examples:
        >>> class ArticleView(APIView):
        ...     permission_classes = [RolePermission]
        ...
        ...     @role_permissions(["read"])
        ...     def get(self, request):
        ...         pass
        ...
        ...     @role_permissions(["edit", "publish"], require_all=True)
        ...     def post(self, request):
        ...         pass
    """

    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            return func(*args, **kwargs)

        wrapper.required_permissions = permissions
        wrapper.require_all = require_all
        return wrapper

    return decorator
