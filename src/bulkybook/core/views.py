"""Core views: identity pages, error page, health check and company admin."""

import logging

from django.contrib import messages
from django.contrib.auth import login
from django.contrib.auth import views as auth_views
from django.contrib.auth.models import Group
from django.db import DatabaseError, connection, transaction
from django.http import Http404, JsonResponse
from django.shortcuts import redirect, render
from django.views import View
from django.views.generic import TemplateView

from .forms import CompanyForm, RegisterForm
from .mixins import RoleRequiredMixin
from .models import Company
from .roles import ROLE_ADMIN, ROLE_COMPANY

logger = logging.getLogger(__name__)


def health_check(request):
    """GET /health/ - database reachable and Stripe configured.

    Returns 503 when the database cannot be reached.
    """
    try:
        connection.ensure_connection()
    except DatabaseError as e:
        logger.error(f"Health check failed: {e}")
        return JsonResponse({"status": "unhealthy", "database": "unreachable"}, status=503)

    services = getattr(request, "services", None)
    return JsonResponse(
        {
            "status": "healthy",
            "database": "connected",
            "payments": "configured" if services is not None else "unavailable",
        }
    )


class ErrorView(TemplateView):
    """Generic error page shown by ExceptionHandlerMiddleware."""

    template_name = "customer/home/error.html"


# =============================================================================
# Identity
# =============================================================================


class LoginView(auth_views.LoginView):
    template_name = "identity/login.html"
    redirect_authenticated_user = True


class LogoutView(auth_views.LogoutView):
    pass


class AccessDeniedView(TemplateView):
    template_name = "identity/access_denied.html"


class RegisterView(View):
    """Register a customer account.

    Admins registering another user may pick the role and company.
    """

    template_name = "identity/register.html"

    def _admin_registering(self, request):
        user = request.user
        return user.is_authenticated and (user.is_superuser or user.has_role(ROLE_ADMIN))

    def get(self, request):
        form = RegisterForm(allow_role_selection=self._admin_registering(request))
        return render(request, self.template_name, {"form": form})

    def post(self, request):
        admin_registering = self._admin_registering(request)
        form = RegisterForm(request.POST, allow_role_selection=admin_registering)
        if not form.is_valid():
            return render(request, self.template_name, {"form": form})

        with transaction.atomic():
            user = form.save(commit=False)
            role = form.selected_role
            if role == ROLE_COMPANY:
                user.company = form.cleaned_data.get("company")
            user.save()
            group, _ = Group.objects.get_or_create(name=role)
            user.groups.add(group)

        logger.info(f"Registered {user.email} as {role}")

        if admin_registering:
            messages.success(request, "New user created successfully.")
        else:
            login(request, user, backend="bulkybook.core.backends.EmailBackend")
        return redirect("home")


# =============================================================================
# Admin: companies
# =============================================================================


class CompanyListView(RoleRequiredMixin, TemplateView):
    template_name = "admin/company/index.html"
    required_roles = (ROLE_ADMIN,)

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["companies"] = self.request.unit_of_work.company.get_all()
        return context


class CompanyUpsertView(RoleRequiredMixin, View):
    """Create a company, or edit it when ``id`` is given."""

    template_name = "admin/company/upsert.html"
    required_roles = (ROLE_ADMIN,)

    def _get_company(self, id):
        if id is None:
            return Company()
        company = self.request.unit_of_work.company.get(id=id)
        if company is None:
            raise Http404("Company not found")
        return company

    def get(self, request, id=None):
        form = CompanyForm(instance=self._get_company(id))
        return render(request, self.template_name, {"form": form, "is_new": id is None})

    def post(self, request, id=None):
        company = self._get_company(id)
        form = CompanyForm(request.POST, instance=company)
        if not form.is_valid():
            return render(request, self.template_name, {"form": form, "is_new": id is None})

        uow = request.unit_of_work
        company = form.save(commit=False)
        if id is None:
            uow.company.add(company)
            messages.success(request, "Company created successfully")
        else:
            uow.company.update(company)
            messages.success(request, "Company updated successfully")
        uow.save()
        return redirect("admin:company-index")


class CompanyDeleteView(RoleRequiredMixin, View):
    template_name = "admin/company/delete.html"
    required_roles = (ROLE_ADMIN,)

    def get(self, request, id):
        company = request.unit_of_work.company.get(id=id)
        if company is None:
            raise Http404("Company not found")
        return render(request, self.template_name, {"company": company})

    def post(self, request, id):
        uow = request.unit_of_work
        company = uow.company.get(id=id)
        if company is None:
            raise Http404("Company not found")
        uow.company.remove(company)
        uow.save()
        messages.success(request, "Company deleted successfully")
        return redirect("admin:company-index")
