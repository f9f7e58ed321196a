"""Django app configuration for test stubs."""

from django.apps import AppConfig


class StubsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "roles_authz.tests.stubs"
    label = "stubs"
    verbose_name = "Test stubs app"
