"""Development server that starts without checking migrations.

The tables belong to the hosted database, so there is nothing for Django to
migrate and no reason to block startup on a database connection.
"""

from django.core.management.commands.runserver import Command as RunServer


class Command(RunServer):
    """Run the development server without the migration check."""

    help = "Start the development server without migration checks"

    def check_migrations(self, *_args, **_kwargs):
        """Skip the check; the schema is owned by the hosted database."""
        self.stdout.write(
            self.style.WARNING(
                "Skipping migration checks (schema is managed externally)"
            )
        )
