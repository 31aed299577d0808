"""Test settings."""

from .base import *  # noqa: F401,F403

DEBUG = False

SECRET_KEY = "test-secret-key-not-for-production"

ALLOWED_HOSTS = ["testserver", "localhost"]

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"

STRIPE = {
    "SECRET_KEY": "sk_test_dummy",
    "PUBLISHABLE_KEY": "pk_test_dummy",
    "CURRENCY": "usd",
}

DEFAULT_ADMIN = {
    **DEFAULT_ADMIN,  # noqa: F405
    "EMAIL": "admin@bulkybook.test",
    "PASSWORD": "Admin123*",
}

# The test runner already migrates the test database
SEED_APPLY_MIGRATIONS = False

WHITENOISE_AUTOREFRESH = True

# Application records reach the root logger so caplog can see them
LOGGING = {
    **LOGGING,  # noqa: F405
    "loggers": {
        **LOGGING["loggers"],  # noqa: F405
        "bulkybook": {"handlers": [], "level": "DEBUG", "propagate": True},
    },
}
