"""Management command to apply migrations and seed roles and the default admin."""

from dataclasses import replace

from django.core.management.base import BaseCommand

from bulkybook.core.db_initializer import DbInitializer
from bulkybook.host import get_services, seed_database


class Command(BaseCommand):
    help = "Apply pending migrations and create default roles and the admin account"

    def add_arguments(self, parser):
        parser.add_argument(
            "--skip-migrate",
            action="store_true",
            help="Seed baseline data without running migrations",
        )

    def handle(self, *args, **options):
        services = get_services()
        if options["skip_migrate"]:
            initializer = services.db_initializer
            services = replace(
                services,
                db_initializer=DbInitializer(
                    admin=initializer.admin,
                    apply_migrations=False,
                    using=initializer.using,
                ),
            )

        seed_database(services)
        self.stdout.write(self.style.SUCCESS("Database initialized"))
