"""Django management command to flush the cached permissions of every role.

The command supports:
- Specifying the role model whose cache is flushed. Default is 'roles_authz.Role'.
- Skipping the confirmation prompt with --noinput.
"""

import click
from django.apps import apps
from django.core.management.base import BaseCommand, CommandError

from roles_authz.models import RoleMixin


class Command(BaseCommand):
    """Django management command to flush the cached permissions of every role.

    Roles flush the cache themselves when saved, deleted or restored. This command
    covers permission changes made without saving a role, e.g. through the
    attach/detach methods or direct database edits.

    Example Usage:
        python manage.py flush_role_permissions_cache
        python manage.py flush_role_permissions_cache --role-model myapp.TeamRole --noinput
    """

    help = "Flush the cached permissions of every role."

    def add_arguments(self, parser) -> None:
        """Add command-line arguments to the argument parser.

        Args:
            parser: The Django argument parser instance to configure.
        """
        parser.add_argument(
            "--role-model",
            type=str,
            default="roles_authz.Role",
            help="Role model whose cached permissions are flushed, as 'app_label.ModelName'",
        )
        parser.add_argument(
            "--noinput",
            "--no-input",
            action="store_false",
            dest="interactive",
            help="Do not prompt for confirmation",
        )

    def handle(self, *args, **options):
        """Execute the flush command.

        Args:
            *args: Positional command arguments (unused).
            **options: Command options including 'role_model' and 'interactive'.

        Raises:
            CommandError: If the role model is unknown or its cache cannot be flushed.
        """
        role_model = self.get_role_model(options["role_model"])
        cache = role_model.get_permission_cache()
        tag = role_model.get_permission_role_tag()

        if not cache.supports_tags:
            raise CommandError(
                "The permission cache does not support tags; "
                "process-local entries cannot be flushed from a management command."
            )

        if options["interactive"] and not click.confirm(
            click.style(
                f"Do you want to flush the cached permissions of every role under tag '{tag}'?",
                fg="yellow",
                bold=True,
            ),
            default=True,
        ):
            self.stdout.write("Aborted.")
            return

        cache.invalidate()
        self.stdout.write(self.style.SUCCESS(f"Flushed cached permissions under tag '{tag}'"))

    def get_role_model(self, label: str) -> type[RoleMixin]:
        """Resolve a role model from its label.

        Args:
            label: The model label (e.g., 'roles_authz.Role').

        Returns:
            type[RoleMixin]: The role model class.

        Raises:
            CommandError: If the label does not name a role model.
        """
        try:
            model = apps.get_model(label)
        except (LookupError, ValueError) as exc:
            raise CommandError(f"Unknown role model: {label}") from exc

        if not issubclass(model, RoleMixin):
            raise CommandError(f"{label} is not a role model")

        return model
