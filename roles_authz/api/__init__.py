"""Public API for the roles_authz framework.

This module provides the functions other applications use to manage roles and
to check the permissions of roles and users, without touching the models or
the permission cache directly.
"""

from roles_authz.api.roles import *
from roles_authz.api.users import *
from roles_authz.engine.references import InvalidPermissionReference, PermissionKey
