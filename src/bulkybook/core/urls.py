"""Core URL patterns, grouped by area."""

from django.urls import path

from . import views

identity_urlpatterns = [
    path("Account/Login", views.LoginView.as_view(), name="login"),
    path("Account/Logout", views.LogoutView.as_view(), name="logout"),
    path("Account/Register", views.RegisterView.as_view(), name="register"),
    path("Account/AccessDenied", views.AccessDeniedView.as_view(), name="access-denied"),
]

customer_urlpatterns = [
    path("home/error", views.ErrorView.as_view(), name="home-error"),
]

admin_urlpatterns = [
    path("company", views.CompanyListView.as_view()),
    path("company/index", views.CompanyListView.as_view(), name="company-index"),
    path("company/upsert", views.CompanyUpsertView.as_view(), name="company-create"),
    path("company/upsert/<int:id>", views.CompanyUpsertView.as_view(), name="company-upsert"),
    path("company/delete/<int:id>", views.CompanyDeleteView.as_view(), name="company-delete"),
]
