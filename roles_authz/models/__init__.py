"""Database models for role and permission management.

Concrete applications may define their own role models on top of RoleMixin or
SoftDeletableRoleMixin; Role is the hard-deletable role shipped by this app.
"""

from roles_authz.models.core import (
    Permission,
    Role,
    RoleMixin,
    SoftDeletableRoleMixin,
    SoftDeletableRoleQuerySet,
)
