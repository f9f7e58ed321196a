"""
Production settings for roles_authz.
"""

from roles_authz.settings.common import plugin_settings as common_plugin_settings


def plugin_settings(settings):
    """
    Configure production settings for roles_authz.

    Production deployments share one cache backend between processes, so
    tagged entries are always used there.

    Args:
        settings: The Django settings object
    """
    common_plugin_settings(settings)
    settings.ROLES_AUTHZ_CACHE_SUPPORTS_TAGS = True
