"""URL configuration for BulkyBook project.

Routes follow ``{area}/{controller}/{action}`` with the customer area,
home controller and index action as defaults.
"""

from django.urls import include, path

from bulkybook.catalog import urls as catalog_urls
from bulkybook.catalog.views import HomeIndexView
from bulkybook.core import urls as core_urls
from bulkybook.core.views import health_check
from bulkybook.store import urls as store_urls

customer_urlpatterns = (
    catalog_urls.customer_urlpatterns
    + store_urls.customer_urlpatterns
    + core_urls.customer_urlpatterns
)

admin_urlpatterns = (
    catalog_urls.admin_urlpatterns
    + store_urls.admin_urlpatterns
    + core_urls.admin_urlpatterns
)

urlpatterns = [
    # Health check
    path("health/", health_check, name="health_check"),

    # Default route: customer/home/index
    path("", HomeIndexView.as_view(), name="home"),
    path("customer", HomeIndexView.as_view()),

    # Areas
    path("customer/", include((customer_urlpatterns, "customer"), namespace="customer")),
    path("admin/", include((admin_urlpatterns, "admin"), namespace="admin")),
    path("identity/", include((core_urls.identity_urlpatterns, "identity"), namespace="identity")),
]
