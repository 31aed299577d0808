"""Core mixins for view access control."""

from django.conf import settings
from django.contrib.auth.mixins import LoginRequiredMixin, UserPassesTestMixin
from django.shortcuts import redirect


class RoleRequiredMixin(LoginRequiredMixin, UserPassesTestMixin):
    """Restrict a view to users holding one of ``required_roles``.

    Anonymous users go to the login page, authenticated users without the
    role to the access-denied page.
    """

    required_roles = ()

    def test_func(self):
        user = self.request.user

        # Superusers always have access
        if user.is_superuser:
            return True

        if not self.required_roles:
            return True

        return user.has_role(*self.required_roles)

    def handle_no_permission(self):
        if self.request.user.is_authenticated:
            return redirect(settings.ACCESS_DENIED_URL)
        return super().handle_no_permission()
