"""Database initializer run at startup.

Applies pending migrations, then creates the role groups and the default
administrator when they are missing. Safe to run any number of times.
"""

import logging
from typing import Optional

from django.contrib.auth import get_user_model
from django.contrib.auth.models import Group
from django.core.management import call_command
from django.db import DEFAULT_DB_ALIAS, transaction

from .roles import ALL_ROLES, ROLE_ADMIN

logger = logging.getLogger(__name__)


class DbInitializer:
    """Idempotent schema and baseline-data seeding."""

    def __init__(
        self,
        admin: Optional[dict] = None,
        apply_migrations: bool = True,
        using: str = DEFAULT_DB_ALIAS,
    ):
        self.admin = admin or {}
        self.apply_migrations = apply_migrations
        self.using = using

    def initialize(self) -> None:
        if self.apply_migrations:
            logger.info("Applying pending migrations")
            call_command("migrate", database=self.using, interactive=False, verbosity=0)

        with transaction.atomic(using=self.using):
            self.create_roles()
            self.create_admin()

    def create_roles(self) -> int:
        """Create missing role groups. Returns how many were created."""
        created_count = 0
        for role in ALL_ROLES:
            _, created = Group.objects.using(self.using).get_or_create(name=role)
            if created:
                created_count += 1
                logger.info(f"Created role {role}")
        return created_count

    def create_admin(self):
        """Create the default administrator if no account uses its email.

        Returns:
            The new user, or None when nothing was created
        """
        email = (self.admin.get("EMAIL") or "").strip()
        password = self.admin.get("PASSWORD") or ""
        if not email:
            return None

        User = get_user_model()
        if User.objects.using(self.using).filter(email__iexact=email).exists():
            return None

        if not password:
            logger.warning(f"DEFAULT_ADMIN_PASSWORD not set, skipping creation of {email}")
            return None

        user = User.objects.db_manager(self.using).create_user(
            email=email,
            password=password,
            name=self.admin.get("NAME", ""),
            phone_number=self.admin.get("PHONE_NUMBER", ""),
            street_address=self.admin.get("STREET_ADDRESS", ""),
            city=self.admin.get("CITY", ""),
            state=self.admin.get("STATE", ""),
            postal_code=self.admin.get("POSTAL_CODE", ""),
            is_staff=True,
        )
        user.groups.add(Group.objects.using(self.using).get(name=ROLE_ADMIN))
        logger.info(f"Created default admin {email}")
        return user
