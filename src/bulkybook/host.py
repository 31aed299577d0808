"""Application host: builds the service graph and the WSGI application.

Startup is a one-shot sequence:

1. Configuration load (Stripe keys are required)
2. Service construction
3. Middleware pipeline (``settings.MIDDLEWARE``, loaded by the handler)
4. Database seeding
5. WSGI handler bound to ``ROOT_URLCONF``

Any failure aborts startup; nothing is retried.
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import django
from django.apps import apps
from django.conf import settings

if TYPE_CHECKING:
    from bulkybook.core.db_initializer import DbInitializer
    from bulkybook.core.email import EmailSender
    from bulkybook.store.payments import PaymentGateway, StripeSettings

logger = logging.getLogger(__name__)


@dataclass
class AppServices:
    """Process-wide services, built once at startup."""

    stripe: "StripeSettings"
    payments: "PaymentGateway"
    email_sender: "EmailSender"
    db_initializer: "DbInitializer"


def load_configuration():
    """Read and validate required configuration.

    Raises:
        ImproperlyConfigured: If the Stripe keys are missing
    """
    from bulkybook.store.payments import StripeSettings

    return StripeSettings.from_settings()


def build_services(stripe_settings=None) -> AppServices:
    """Construct the service graph explicitly."""
    from bulkybook.core.db_initializer import DbInitializer
    from bulkybook.core.email import EmailSender
    from bulkybook.store.payments import PaymentGateway

    if stripe_settings is None:
        stripe_settings = load_configuration()

    return AppServices(
        stripe=stripe_settings,
        payments=PaymentGateway(stripe_settings),
        email_sender=EmailSender(),
        db_initializer=DbInitializer(
            admin=getattr(settings, "DEFAULT_ADMIN", {}),
            apply_migrations=getattr(settings, "SEED_APPLY_MIGRATIONS", True),
        ),
    )


def register_services(services: AppServices) -> None:
    apps.get_app_config("core").services = services


def get_services() -> AppServices:
    """Return the registered services, building them on first use."""
    config = apps.get_app_config("core")
    if config.services is None:
        config.services = build_services()
    return config.services


def seed_database(services: AppServices) -> None:
    """Run the database initializer; errors are logged and re-raised."""
    try:
        services.db_initializer.initialize()
    except Exception as e:
        logger.exception(f"Database initialization error: {e}")
        raise


def build_application(seed: bool = True):
    """Run the startup sequence and return the WSGI application."""
    django.setup(set_prefix=False)

    stripe_settings = load_configuration()
    services = build_services(stripe_settings)
    register_services(services)

    if seed:
        seed_database(services)

    from django.core.handlers.wsgi import WSGIHandler

    application = WSGIHandler()
    logger.info("BulkyBook application ready")
    return application
