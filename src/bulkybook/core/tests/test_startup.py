"""Tests for application startup and database seeding."""

import logging
from unittest.mock import MagicMock

import pytest
from django.apps import apps
from django.contrib.auth import get_user_model
from django.contrib.auth.models import Group
from django.core.exceptions import ImproperlyConfigured
from django.core.handlers.wsgi import WSGIHandler
from django.core.management import call_command

from bulkybook.core.db_initializer import DbInitializer
from bulkybook.core.roles import ALL_ROLES, ROLE_ADMIN
from bulkybook.host import build_application, build_services, load_configuration, seed_database
from bulkybook.store.payments import StripeSettings

User = get_user_model()


@pytest.fixture
def restore_services():
    """Put back whatever services were registered before the test."""
    config = apps.get_app_config("core")
    previous = config.services
    yield
    config.services = previous


# =============================================================================
# Configuration
# =============================================================================


class TestLoadConfiguration:
    def test_reads_stripe_keys_from_settings(self, settings):
        settings.STRIPE = {"SECRET_KEY": "sk_live", "PUBLISHABLE_KEY": "pk_live", "CURRENCY": "EUR"}

        stripe_settings = load_configuration()

        assert stripe_settings == StripeSettings("sk_live", "pk_live", "eur")

    @pytest.mark.parametrize(
        "stripe",
        [
            {"SECRET_KEY": "", "PUBLISHABLE_KEY": "pk_live"},
            {"SECRET_KEY": "sk_live", "PUBLISHABLE_KEY": "  "},
            {},
        ],
    )
    def test_missing_stripe_key_is_rejected(self, settings, stripe):
        settings.STRIPE = stripe

        with pytest.raises(ImproperlyConfigured):
            load_configuration()

    def test_sessions_expire_after_100_idle_minutes(self, settings):
        assert settings.SESSION_COOKIE_AGE == 100 * 60
        assert settings.SESSION_SAVE_EVERY_REQUEST is True
        assert settings.SESSION_COOKIE_HTTPONLY is True


# =============================================================================
# Startup sequence
# =============================================================================


class TestBuildApplication:
    def test_missing_stripe_key_aborts_before_seeding(self, settings, monkeypatch, restore_services):
        settings.STRIPE = {"SECRET_KEY": "sk_live"}
        initialize = MagicMock()
        monkeypatch.setattr(DbInitializer, "initialize", initialize)

        with pytest.raises(ImproperlyConfigured):
            build_application()

        initialize.assert_not_called()

    def test_builds_handler_and_seeds(self, db, restore_services):
        application = build_application()

        assert isinstance(application, WSGIHandler)
        assert apps.get_app_config("core").services is not None
        assert set(Group.objects.values_list("name", flat=True)) == set(ALL_ROLES)
        admin = User.objects.get(email="admin@bulkybook.test")
        assert admin.has_role(ROLE_ADMIN)

    def test_seed_can_be_skipped(self, db, restore_services):
        build_application(seed=False)

        assert not Group.objects.exists()


class TestSeedDatabase:
    def test_failure_is_logged_and_reraised(self, caplog):
        services = build_services(StripeSettings("sk", "pk"))
        services.db_initializer = MagicMock()
        services.db_initializer.initialize.side_effect = RuntimeError("database unreachable")

        with caplog.at_level(logging.ERROR, logger="bulkybook.host"):
            with pytest.raises(RuntimeError):
                seed_database(services)

        assert "Database initialization error: database unreachable" in caplog.text

    def test_seed_command_creates_roles_and_admin(self, db, restore_services):
        call_command("seed", "--skip-migrate")

        assert Group.objects.count() == len(ALL_ROLES)
        assert User.objects.filter(email="admin@bulkybook.test").exists()


# =============================================================================
# DbInitializer
# =============================================================================


class TestDbInitializer:
    def _initializer(self, **admin):
        admin.setdefault("EMAIL", "root@example.com")
        admin.setdefault("PASSWORD", "Root123*")
        return DbInitializer(admin=admin, apply_migrations=False)

    def test_running_twice_changes_nothing(self, db):
        initializer = self._initializer()

        initializer.initialize()
        initializer.initialize()

        assert Group.objects.count() == len(ALL_ROLES)
        assert User.objects.filter(email="root@example.com").count() == 1

    def test_create_roles_reports_only_new_groups(self, db):
        Group.objects.create(name=ROLE_ADMIN)

        created = self._initializer().create_roles()

        assert created == len(ALL_ROLES) - 1

    def test_existing_admin_email_is_left_alone(self, db):
        initializer = self._initializer()
        initializer.create_roles()
        User.objects.create_user(email="ROOT@example.com", password="other", name="Existing")

        assert initializer.create_admin() is None
        assert User.objects.count() == 1

    def test_admin_without_password_is_skipped(self, db):
        initializer = self._initializer(PASSWORD="")
        initializer.create_roles()

        assert initializer.create_admin() is None
        assert not User.objects.exists()

    def test_admin_can_log_in(self, db, client):
        self._initializer().initialize()

        assert client.login(username="root@example.com", password="Root123*")
