"""WSGI config for BulkyBook project."""

import os

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "bulkybook.settings.prod")

from bulkybook.host import build_application  # noqa: E402

application = build_application()
