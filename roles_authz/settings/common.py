"""
Common settings for roles_authz.
"""


def plugin_settings(settings):
    """
    Configure default settings for roles_authz.

    Every value is only set when the host project has not defined it already,
    so project settings always take precedence.

    Args:
        settings: The Django settings object
    """
    # Cache alias (from CACHES) that holds tagged permission entries.
    if not hasattr(settings, "ROLES_AUTHZ_CACHE_ALIAS"):
        settings.ROLES_AUTHZ_CACHE_ALIAS = "default"

    # Whether the permission cache groups entries under the role-permission tag.
    # When disabled, entries are kept in a process-local store that never expires
    # and is never flushed by role saves.
    if not hasattr(settings, "ROLES_AUTHZ_CACHE_SUPPORTS_TAGS"):
        settings.ROLES_AUTHZ_CACHE_SUPPORTS_TAGS = True

    # Lifetime (in seconds) of tagged permission entries.
    if not hasattr(settings, "ROLES_AUTHZ_CACHE_TTL"):
        settings.ROLES_AUTHZ_CACHE_TTL = 60

    # Name of the process-local store used when tagging is disabled.
    if not hasattr(settings, "ROLES_AUTHZ_LOCAL_CACHE_LOCATION"):
        settings.ROLES_AUTHZ_LOCAL_CACHE_LOCATION = "roles_authz_permissions"

    # Tag for permission entries. None means the role-permission join table name.
    if not hasattr(settings, "ROLES_AUTHZ_PERMISSION_ROLE_TABLE"):
        settings.ROLES_AUTHZ_PERMISSION_ROLE_TABLE = None
