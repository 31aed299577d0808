"""Outgoing mail."""

import logging
from typing import Optional

from django.conf import settings
from django.core.mail import send_mail
from django.utils.html import strip_tags

logger = logging.getLogger(__name__)


class EmailSender:
    """Sends HTML mail through the configured Django email backend."""

    def __init__(self, from_email: Optional[str] = None):
        self.from_email = from_email or settings.DEFAULT_FROM_EMAIL

    def send_email(self, email: str, subject: str, html_message: str) -> None:
        send_mail(
            subject,
            strip_tags(html_message),
            self.from_email,
            [email],
            html_message=html_message,
        )
        logger.info(f"Sent '{subject}' to {email}")
