"""Identity and company forms."""

from django import forms
from django.contrib.auth.forms import UserCreationForm

from .models import Company, User
from .roles import ALL_ROLES, ROLE_COMPANY, ROLE_CUSTOMER


class RegisterForm(UserCreationForm):
    """Account registration with shipping details.

    ``role`` and ``company`` are only offered when an admin registers a user.
    """

    role = forms.ChoiceField(choices=[(role, role) for role in ALL_ROLES], initial=ROLE_CUSTOMER, required=False)
    company = forms.ModelChoiceField(queryset=Company.objects.all(), required=False)

    class Meta:
        model = User
        fields = ("email", "name", "street_address", "city", "state", "postal_code", "phone_number")

    def __init__(self, *args, allow_role_selection=False, **kwargs):
        super().__init__(*args, **kwargs)
        self.allow_role_selection = allow_role_selection
        if not allow_role_selection:
            del self.fields["role"]
            del self.fields["company"]

    def clean(self):
        cleaned_data = super().clean()
        if self.allow_role_selection:
            role = cleaned_data.get("role") or ROLE_CUSTOMER
            cleaned_data["role"] = role
            if role == ROLE_COMPANY and not cleaned_data.get("company"):
                self.add_error("company", "Company users must belong to a company.")
        return cleaned_data

    @property
    def selected_role(self):
        if self.allow_role_selection:
            return self.cleaned_data.get("role") or ROLE_CUSTOMER
        return ROLE_CUSTOMER


class CompanyForm(forms.ModelForm):
    class Meta:
        model = Company
        fields = ("name", "street_address", "city", "state", "postal_code", "phone_number")
