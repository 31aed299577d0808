"""Stripe Checkout integration.

The secret key travels in a ``StripeSettings`` object and is passed to
every SDK call as ``api_key``; ``stripe.api_key`` is never assigned.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

import stripe
from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StripeSettings:
    """Stripe credentials and checkout currency."""

    secret_key: str
    publishable_key: str
    currency: str = "usd"

    @classmethod
    def from_settings(cls, config: Optional[dict] = None) -> "StripeSettings":
        """Read the ``STRIPE`` settings block.

        Raises:
            ImproperlyConfigured: If either key is blank or absent
        """
        if config is None:
            config = getattr(settings, "STRIPE", None) or {}

        secret_key = (config.get("SECRET_KEY") or "").strip()
        publishable_key = (config.get("PUBLISHABLE_KEY") or "").strip()

        if not secret_key or not publishable_key:
            logger.error(
                "Stripe configuration keys are missing. "
                "Set STRIPE_SECRET_KEY and STRIPE_PUBLISHABLE_KEY in the environment or .env."
            )
            raise ImproperlyConfigured("Stripe keys are missing.")

        return cls(
            secret_key=secret_key,
            publishable_key=publishable_key,
            currency=(config.get("CURRENCY") or "usd").lower(),
        )


def build_line_items(details: Iterable, currency: str) -> List[Dict[str, Any]]:
    """Convert order lines to Stripe Checkout line_items."""
    line_items: List[Dict[str, Any]] = []

    for detail in details:
        if detail.count <= 0:
            continue

        amount = int(round(detail.price * 100))
        line_items.append(
            {
                "quantity": detail.count,
                "price_data": {
                    "currency": currency,
                    "unit_amount": amount,
                    "product_data": {"name": detail.product.title},
                },
            }
        )

    return line_items


class PaymentGateway:
    """Stripe Checkout sessions and refunds for orders."""

    def __init__(self, stripe_settings: StripeSettings):
        self.settings = stripe_settings

    @property
    def publishable_key(self) -> str:
        return self.settings.publishable_key

    def create_checkout_session(
        self,
        details: Iterable,
        success_url: str,
        cancel_url: str,
        metadata: Optional[dict] = None,
    ):
        """Create a Checkout session for ``details``.

        Returns:
            The Stripe session; redirect the customer to ``session.url``

        Raises:
            stripe.StripeError: On any Stripe API failure
        """
        session = stripe.checkout.Session.create(
            api_key=self.settings.secret_key,
            mode="payment",
            line_items=build_line_items(details, self.settings.currency),
            success_url=success_url,
            cancel_url=cancel_url,
            metadata=metadata or {},
        )
        logger.info(f"Created Stripe checkout session {session.id}")
        return session

    def retrieve_session(self, session_id: str):
        return stripe.checkout.Session.retrieve(session_id, api_key=self.settings.secret_key)

    def is_paid(self, session) -> bool:
        return getattr(session, "payment_status", None) == "paid"

    def refund(self, payment_intent_id: str):
        """Refund the full amount of ``payment_intent_id``."""
        refund = stripe.Refund.create(
            api_key=self.settings.secret_key,
            payment_intent=payment_intent_id,
            reason="requested_by_customer",
        )
        logger.info(f"Refunded payment intent {payment_intent_id}")
        return refund
