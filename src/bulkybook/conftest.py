"""Shared pytest fixtures for BulkyBook tests."""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from django.apps import apps
from django.contrib.auth import get_user_model
from django.contrib.auth.models import Group
from django.test import Client

from bulkybook.core.db_initializer import DbInitializer
from bulkybook.core.email import EmailSender
from bulkybook.core.roles import ROLE_ADMIN, ROLE_COMPANY, ROLE_CUSTOMER, ROLE_EMPLOYEE
from bulkybook.host import AppServices, register_services
from bulkybook.store.payments import PaymentGateway, StripeSettings

User = get_user_model()

PASSWORD = "testpass123"


@pytest.fixture
def client():
    """Return a Django test client."""
    return Client()


@pytest.fixture
def roles(db):
    """Create the role groups."""
    DbInitializer().create_roles()
    return {group.name: group for group in Group.objects.all()}


@pytest.fixture
def make_user(db, roles):
    """Factory creating a user in the given role."""

    def _make_user(email, role=ROLE_CUSTOMER, **extra):
        extra.setdefault("name", email.split("@")[0].title())
        user = User.objects.create_user(email=email, password=PASSWORD, **extra)
        user.groups.add(roles[role])
        return user

    return _make_user


@pytest.fixture
def customer_user(make_user):
    return make_user(
        "customer@example.com",
        phone_number="555-0100",
        street_address="1 Main St",
        city="Springfield",
        state="IL",
        postal_code="62701",
    )


@pytest.fixture
def other_customer(make_user):
    return make_user("other@example.com")


@pytest.fixture
def admin_user(make_user):
    return make_user("admin@example.com", role=ROLE_ADMIN, is_staff=True)


@pytest.fixture
def employee_user(make_user):
    return make_user("employee@example.com", role=ROLE_EMPLOYEE)


@pytest.fixture
def company(db):
    from bulkybook.core.models import Company

    return Company.objects.create(name="Acme Books", city="Chicago", phone_number="555-0199")


@pytest.fixture
def company_user(make_user, company):
    return make_user(
        "buyer@acme.example",
        role=ROLE_COMPANY,
        company=company,
        phone_number="555-0111",
        street_address="2 Market St",
        city="Chicago",
        state="IL",
        postal_code="60601",
    )


def _logged_in(user):
    client = Client()
    client.force_login(user)
    return client


@pytest.fixture
def customer_client(customer_user):
    return _logged_in(customer_user)


@pytest.fixture
def admin_client(admin_user):
    return _logged_in(admin_user)


@pytest.fixture
def employee_client(employee_user):
    return _logged_in(employee_user)


@pytest.fixture
def company_client(company_user):
    return _logged_in(company_user)


@pytest.fixture
def category(db):
    from bulkybook.catalog.models import Category

    return Category.objects.create(name="Fiction", display_order=1)


@pytest.fixture
def product(db, category):
    """Create a product with two images and distinct price tiers."""
    from bulkybook.catalog.models import Product, ProductImage

    product = Product.objects.create(
        title="Fortune of Time",
        description="A story",
        isbn="SWD9999001",
        author="Billy Spark",
        list_price=Decimal("99.00"),
        price=Decimal("90.00"),
        price50=Decimal("85.00"),
        price100=Decimal("80.00"),
        category=category,
    )
    ProductImage.objects.create(product=product, image_url="/images/product/fortune-1.jpg")
    ProductImage.objects.create(product=product, image_url="/images/product/fortune-2.jpg")
    return product


@pytest.fixture
def stripe_session():
    """A paid Stripe Checkout session."""
    return MagicMock(
        id="cs_test_123",
        url="https://checkout.stripe.test/pay/cs_test_123",
        payment_status="paid",
        payment_intent="pi_test_123",
    )


@pytest.fixture
def services(settings, stripe_session):
    """Register a service graph whose payment gateway is a mock."""
    payments = MagicMock(spec=PaymentGateway)
    payments.create_checkout_session.return_value = stripe_session
    payments.retrieve_session.return_value = stripe_session
    payments.is_paid.side_effect = lambda session: session.payment_status == "paid"

    app_services = AppServices(
        stripe=StripeSettings.from_settings(),
        payments=payments,
        email_sender=EmailSender(),
        db_initializer=DbInitializer(admin=settings.DEFAULT_ADMIN, apply_migrations=False),
    )

    config = apps.get_app_config("core")
    previous = config.services
    register_services(app_services)
    yield app_services
    config.services = previous
