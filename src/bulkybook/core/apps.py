"""Core app configuration."""

from django.apps import AppConfig


class CoreConfig(AppConfig):
    """Configuration for the core application.

    ``services`` holds the ``AppServices`` graph built by ``bulkybook.host``.
    """

    name = "bulkybook.core"
    verbose_name = "BulkyBook Core"
    default_auto_field = "django.db.models.BigAutoField"

    services = None
