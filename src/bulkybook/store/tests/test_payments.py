"""Tests for the Stripe payment gateway."""

from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
import stripe

from bulkybook.store.payments import PaymentGateway, StripeSettings, build_line_items


def detail(title, count, price):
    return SimpleNamespace(product=SimpleNamespace(title=title), count=count, price=Decimal(price))


@pytest.fixture
def gateway():
    return PaymentGateway(StripeSettings("sk_test_gateway", "pk_test_gateway"))


def test_line_items_are_priced_in_cents():
    items = build_line_items([detail("Fortune of Time", 3, "85.50")], "usd")

    assert items == [
        {
            "quantity": 3,
            "price_data": {
                "currency": "usd",
                "unit_amount": 8550,
                "product_data": {"name": "Fortune of Time"},
            },
        }
    ]


def test_empty_lines_are_skipped():
    assert build_line_items([detail("Nothing", 0, "10.00")], "usd") == []


def test_checkout_session_passes_api_key(gateway, monkeypatch):
    create = MagicMock(return_value=SimpleNamespace(id="cs_1", url="https://stripe.test/cs_1"))
    monkeypatch.setattr(stripe.checkout.Session, "create", create)

    session = gateway.create_checkout_session(
        [detail("Dark Skies", 1, "30.00")],
        success_url="https://shop.test/ok",
        cancel_url="https://shop.test/cancel",
    )

    assert session.id == "cs_1"
    kwargs = create.call_args.kwargs
    assert kwargs["api_key"] == "sk_test_gateway"
    assert kwargs["mode"] == "payment"
    assert kwargs["success_url"] == "https://shop.test/ok"
    assert kwargs["line_items"][0]["price_data"]["unit_amount"] == 3000


def test_global_api_key_is_not_set(gateway, monkeypatch):
    monkeypatch.setattr(stripe, "api_key", None)
    monkeypatch.setattr(stripe.Refund, "create", MagicMock())

    gateway.refund("pi_1")

    assert stripe.api_key is None
    stripe.Refund.create.assert_called_once_with(
        api_key="sk_test_gateway",
        payment_intent="pi_1",
        reason="requested_by_customer",
    )


def test_is_paid(gateway):
    assert gateway.is_paid(SimpleNamespace(payment_status="paid"))
    assert not gateway.is_paid(SimpleNamespace(payment_status="unpaid"))


def test_publishable_key(gateway):
    assert gateway.publishable_key == "pk_test_gateway"
