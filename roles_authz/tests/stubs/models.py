"""Stub models for testing soft deletable roles.

The app ships only a hard-deletable Role; projects needing restorable roles
define their own model on top of SoftDeletableRoleMixin, as this stub does.
"""

from roles_authz.models import SoftDeletableRoleMixin


class SoftDeletableRole(SoftDeletableRoleMixin):
    """Stub role kept in the database when deleted.

    .. no_pii:
    """
