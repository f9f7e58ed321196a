"""
roles_authz Django application initialization.
"""

from django.apps import AppConfig


class RolesAuthzConfig(AppConfig):
    """
    Configuration for the roles_authz Django application.
    """

    name = "roles_authz"
    verbose_name = "Roles AuthZ"
    default_auto_field = "django.db.models.BigAutoField"
    plugin_app = {
        "settings_config": {
            "lms.djangoapp": {
                "test": {"relative_path": "settings.test"},
                "common": {"relative_path": "settings.common"},
                "production": {"relative_path": "settings.production"},
            },
            "cms.djangoapp": {
                "test": {"relative_path": "settings.test"},
                "common": {"relative_path": "settings.common"},
                "production": {"relative_path": "settings.production"},
            },
        },
    }
