"""Tests for registration, login and role-based access."""

import pytest
from django.contrib.auth import get_user_model
from django.db import OperationalError, connection
from django.http import Http404
from django.test import RequestFactory

from bulkybook.core.middleware import ERROR_PAGE_URL, ExceptionHandlerMiddleware
from bulkybook.core.roles import ROLE_COMPANY, ROLE_CUSTOMER

User = get_user_model()

REGISTER_URL = "/identity/Account/Register"


def registration_data(email="new@example.com", **extra):
    data = {
        "email": email,
        "name": "New Reader",
        "street_address": "9 Elm St",
        "city": "Portland",
        "state": "OR",
        "postal_code": "97201",
        "phone_number": "555-0123",
        "password1": "Str0ng-Passw0rd!",
        "password2": "Str0ng-Passw0rd!",
    }
    data.update(extra)
    return data


# =============================================================================
# Registration
# =============================================================================


class TestRegister:
    def test_self_registration_creates_customer_and_logs_in(self, client, roles):
        response = client.post(REGISTER_URL, registration_data())

        assert response.status_code == 302
        user = User.objects.get(email="new@example.com")
        assert user.role_names == {ROLE_CUSTOMER}
        assert user.company is None
        assert client.session["_auth_user_id"] == str(user.pk)

    def test_self_registration_ignores_role_field(self, client, roles, company):
        client.post(REGISTER_URL, registration_data(role=ROLE_COMPANY, company=company.pk))

        user = User.objects.get(email="new@example.com")
        assert user.role_names == {ROLE_CUSTOMER}
        assert user.company is None

    def test_admin_can_register_company_user(self, admin_client, admin_user, company):
        response = admin_client.post(
            REGISTER_URL, registration_data(role=ROLE_COMPANY, company=company.pk)
        )

        assert response.status_code == 302
        user = User.objects.get(email="new@example.com")
        assert user.has_role(ROLE_COMPANY)
        assert user.company == company
        # The admin stays logged in as themselves
        assert admin_client.session["_auth_user_id"] == str(admin_user.pk)

    def test_company_role_requires_company(self, admin_client, roles):
        response = admin_client.post(REGISTER_URL, registration_data(role=ROLE_COMPANY))

        assert response.status_code == 200
        assert "company" in response.context["form"].errors
        assert not User.objects.filter(email="new@example.com").exists()

    def test_duplicate_email_is_rejected(self, client, customer_user):
        response = client.post(REGISTER_URL, registration_data(email="customer@example.com"))

        assert response.status_code == 200
        assert User.objects.filter(email="customer@example.com").count() == 1


# =============================================================================
# Login and access control
# =============================================================================


class TestLogin:
    def test_login_matches_email_case_insensitively(self, client, customer_user):
        assert client.login(username="CUSTOMER@example.com", password="testpass123")

    def test_wrong_password_fails(self, client, customer_user):
        assert not client.login(username="customer@example.com", password="nope")

    def test_login_page_posts_email(self, client, customer_user):
        response = client.post(
            "/identity/Account/Login",
            {"username": "customer@example.com", "password": "testpass123"},
        )

        assert response.status_code == 302


class TestRoleAccess:
    def test_anonymous_is_sent_to_login(self, client):
        response = client.get("/admin/category/index")

        assert response.status_code == 302
        assert response.url.startswith("/identity/Account/Login")

    def test_customer_is_sent_to_access_denied(self, customer_client):
        response = customer_client.get("/admin/category/index")

        assert response.status_code == 302
        assert response.url == "/identity/Account/AccessDenied"

    def test_admin_can_open_admin_pages(self, admin_client):
        response = admin_client.get("/admin/category/index")

        assert response.status_code == 200

    def test_navbar_flags_follow_roles(self, admin_client, customer_client):
        assert admin_client.get("/").context["is_admin"] is True
        assert customer_client.get("/").context["is_admin"] is False


# =============================================================================
# Error handling
# =============================================================================


class TestExceptionHandlerMiddleware:
    def _middleware(self):
        return ExceptionHandlerMiddleware(lambda request: None)

    def test_unhandled_error_redirects_to_error_page(self, settings):
        settings.DEBUG = False
        request = RequestFactory().get("/customer/cart/index")

        response = self._middleware().process_exception(request, RuntimeError("boom"))

        assert response.status_code == 302
        assert response.url == ERROR_PAGE_URL

    def test_debug_shows_django_error_page(self, settings):
        settings.DEBUG = True
        request = RequestFactory().get("/customer/cart/index")

        assert self._middleware().process_exception(request, RuntimeError("boom")) is None

    def test_not_found_is_left_to_django(self, settings):
        settings.DEBUG = False
        request = RequestFactory().get("/customer/home/details")

        assert self._middleware().process_exception(request, Http404()) is None

    def test_error_page_renders(self, client, db):
        response = client.get(ERROR_PAGE_URL)

        assert response.status_code == 200


@pytest.mark.django_db
class TestHealthCheck:
    def test_healthy(self, client):
        response = client.get("/health/")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "database": "connected", "payments": "configured"}

    def test_unreachable_database_is_503(self, client, monkeypatch):
        def refuse():
            raise OperationalError("connection refused")

        monkeypatch.setattr(connection, "ensure_connection", refuse)

        response = client.get("/health/")

        assert response.status_code == 503
        assert response.json()["database"] == "unreachable"
