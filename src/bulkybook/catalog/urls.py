"""Catalog URL patterns, grouped by area."""

from django.urls import path

from . import views

customer_urlpatterns = [
    path("home", views.HomeIndexView.as_view()),
    path("home/index", views.HomeIndexView.as_view(), name="home-index"),
    path("home/details", views.HomeDetailsView.as_view(), name="home-details"),
]

admin_urlpatterns = [
    # Categories
    path("category", views.CategoryListView.as_view()),
    path("category/index", views.CategoryListView.as_view(), name="category-index"),
    path("category/upsert", views.CategoryUpsertView.as_view(), name="category-create"),
    path("category/upsert/<int:id>", views.CategoryUpsertView.as_view(), name="category-upsert"),
    path("category/delete/<int:id>", views.CategoryDeleteView.as_view(), name="category-delete"),

    # Products
    path("product", views.ProductListView.as_view()),
    path("product/index", views.ProductListView.as_view(), name="product-index"),
    path("product/upsert", views.ProductUpsertView.as_view(), name="product-create"),
    path("product/upsert/<int:id>", views.ProductUpsertView.as_view(), name="product-upsert"),
    path("product/getAll", views.ProductListApiView.as_view(), name="product-getall"),
    path("product/delete", views.ProductDeleteApiView.as_view(), name="product-delete"),
]
