"""Django REST framework permissions backed by role permissions."""

from rest_framework.permissions import BasePermission

from roles_authz import api


class RolePermission(BasePermission):
    """Grant access when the request user's roles hold the permissions required by the view.

    Required permissions are read from the view method (see the @role_permissions
    decorator), falling back to `required_permissions` and `require_all` attributes
    on the view class. Views declaring no permissions are not restricted.

    Examples:
        >>> class ArticleView(APIView):
        ...     permission_classes = [RolePermission]
        ...     required_permissions = ["read"]

    Note:
        Superusers always have permission.
    """

    def get_required_permissions(self, request, view) -> tuple[list[str], bool]:
        """Extract the required permissions from the view.

        Args:
            request: The Django REST framework request object.
            view: The view being accessed.

        Returns:
            tuple[list[str], bool]: The permission names and whether all of them are required.
        """
        handler = getattr(view, request.method.lower(), None)
        if handler and hasattr(handler, "required_permissions"):
            return handler.required_permissions, getattr(handler, "require_all", False)
        return getattr(view, "required_permissions", []), getattr(view, "require_all", False)

    def has_permission(self, request, view) -> bool:
        """Check the required permissions against the roles of the request user.

        Returns:
            bool: True if the user's roles grant the required permissions.
        """
        if request.user.is_superuser:
            return True

        permissions, require_all = self.get_required_permissions(request, view)
        if not permissions:
            return True

        return api.user_has_permission(request.user, permissions, require_all)
