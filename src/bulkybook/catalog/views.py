"""Catalog views: customer storefront and admin category/product management."""

import logging

from django.contrib import messages
from django.contrib.auth.views import redirect_to_login
from django.db.models import ProtectedError
from django.http import Http404, JsonResponse
from django.shortcuts import redirect, render
from django.views import View
from django.views.generic import TemplateView

from bulkybook.core.mixins import RoleRequiredMixin
from bulkybook.core.roles import ROLE_ADMIN
from bulkybook.data import ProductUpdate
from bulkybook.store.cart import MAX_CART_COUNT, refresh_cart_count
from bulkybook.store.models import ShoppingCart

from .forms import CategoryForm, ProductForm
from .models import Category, ProductImage

logger = logging.getLogger(__name__)


# =============================================================================
# Customer: storefront
# =============================================================================


class HomeIndexView(TemplateView):
    """Homepage listing every product."""

    template_name = "customer/home/index.html"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["products"] = self.request.unit_of_work.product.get_all(include="category,images")
        return context


class HomeDetailsView(View):
    """Product details; POST adds the product to the cart."""

    template_name = "customer/home/details.html"

    def get(self, request):
        product_id = request.GET.get("productId")
        if not product_id or not product_id.isdigit():
            raise Http404("Product not found")

        product = request.unit_of_work.product.get(id=int(product_id), include="category,images")
        if product is None:
            raise Http404("Product not found")
        return render(request, self.template_name, {"product": product, "count": 1})

    def post(self, request):
        if not request.user.is_authenticated:
            return redirect_to_login(request.get_full_path())

        try:
            product_id = int(request.POST.get("productId", ""))
            count = int(request.POST.get("count", "1"))
        except ValueError:
            messages.error(request, "Invalid product or count.")
            return redirect("home")

        uow = request.unit_of_work
        product = uow.product.get(id=product_id)
        if product is None:
            raise Http404("Product not found")
        details_url = f"/customer/home/details?productId={product_id}"
        if count < 1 or count > MAX_CART_COUNT:
            messages.error(request, f"Count must be between 1 and {MAX_CART_COUNT}.")
            return redirect(details_url)

        cart = uow.shopping_cart.get(application_user=request.user, product_id=product_id)
        if cart is not None:
            if cart.count + count > MAX_CART_COUNT:
                messages.error(
                    request,
                    f"Your cart already holds {cart.count} copies; at most {MAX_CART_COUNT} are allowed.",
                )
                return redirect(details_url)
            cart.count += count
            uow.shopping_cart.update(cart)
        else:
            uow.shopping_cart.add(ShoppingCart(application_user=request.user, product=product, count=count))
        uow.save()

        refresh_cart_count(request)
        messages.success(request, "Cart updated successfully")
        return redirect("home")


# =============================================================================
# Admin: categories
# =============================================================================


class CategoryListView(RoleRequiredMixin, TemplateView):
    template_name = "admin/category/index.html"
    required_roles = (ROLE_ADMIN,)

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["categories"] = self.request.unit_of_work.category.get_all()
        return context


class CategoryUpsertView(RoleRequiredMixin, View):
    """Create a category, or edit it when ``id`` is given."""

    template_name = "admin/category/upsert.html"
    required_roles = (ROLE_ADMIN,)

    def _get_category(self, id):
        if id is None:
            return Category()
        category = self.request.unit_of_work.category.get(id=id)
        if category is None:
            raise Http404("Category not found")
        return category

    def get(self, request, id=None):
        form = CategoryForm(instance=self._get_category(id))
        return render(request, self.template_name, {"form": form, "is_new": id is None})

    def post(self, request, id=None):
        form = CategoryForm(request.POST, instance=self._get_category(id))
        if not form.is_valid():
            return render(request, self.template_name, {"form": form, "is_new": id is None})

        uow = request.unit_of_work
        category = form.save(commit=False)
        if id is None:
            uow.category.add(category)
            messages.success(request, "Category created successfully")
        else:
            uow.category.update(category)
            messages.success(request, "Category updated successfully")
        uow.save()
        return redirect("admin:category-index")


class CategoryDeleteView(RoleRequiredMixin, View):
    template_name = "admin/category/delete.html"
    required_roles = (ROLE_ADMIN,)

    def get(self, request, id):
        category = request.unit_of_work.category.get(id=id)
        if category is None:
            raise Http404("Category not found")
        return render(request, self.template_name, {"category": category})

    def post(self, request, id):
        uow = request.unit_of_work
        category = uow.category.get(id=id)
        if category is None:
            raise Http404("Category not found")

        uow.category.remove(category)
        try:
            uow.save()
        except ProtectedError:
            uow.discard()
            messages.error(request, "Category still has products and cannot be deleted")
            return redirect("admin:category-index")

        messages.success(request, "Category deleted successfully")
        return redirect("admin:category-index")


# =============================================================================
# Admin: products
# =============================================================================


class ProductListView(RoleRequiredMixin, TemplateView):
    """Product grid page; rows are loaded from ProductListApiView."""

    template_name = "admin/product/index.html"
    required_roles = (ROLE_ADMIN,)


class ProductUpsertView(RoleRequiredMixin, View):
    """Create a product, or edit it through ``ProductRepository.update``."""

    template_name = "admin/product/upsert.html"
    required_roles = (ROLE_ADMIN,)

    def _render(self, request, form, id):
        return render(
            request,
            self.template_name,
            {"form": form, "is_new": id is None, "categories": request.unit_of_work.category.get_all()},
        )

    def get(self, request, id=None):
        if id is None:
            return self._render(request, ProductForm(), id)

        product = request.unit_of_work.product.get(id=id, include="images")
        if product is None:
            raise Http404("Product not found")
        return self._render(request, ProductForm(instance=product), id)

    def post(self, request, id=None):
        form = ProductForm(request.POST)
        if not form.is_valid():
            return self._render(request, form, id)

        uow = request.unit_of_work
        image_urls = form.cleaned_data["image_urls"]

        if id is None:
            product = form.save(commit=False)
            uow.product.add(product)
            uow.save()
            for url in image_urls:
                uow.product_image.add(ProductImage(product=product, image_url=url))
            uow.save()
            messages.success(request, "Product created successfully")
        else:
            product_update = ProductUpdate.from_cleaned_data(id, form.cleaned_data, image_urls)
            if not uow.product.update(product_update):
                raise Http404("Product not found")
            uow.save()
            messages.success(request, "Product updated successfully")

        return redirect("admin:product-index")


def serialize_product(product):
    return {
        "id": product.pk,
        "title": product.title,
        "isbn": product.isbn,
        "author": product.author,
        "listPrice": float(product.list_price),
        "price": float(product.price),
        "category": {"id": product.category_id, "name": product.category.name},
    }


class ProductListApiView(RoleRequiredMixin, View):
    """GET /admin/product/getAll - products for the admin grid."""

    required_roles = (ROLE_ADMIN,)

    def get(self, request):
        products = request.unit_of_work.product.get_all(include="category")
        return JsonResponse({"data": [serialize_product(product) for product in products]})


class ProductDeleteApiView(RoleRequiredMixin, View):
    """DELETE /admin/product/delete?id=N"""

    required_roles = (ROLE_ADMIN,)

    def delete(self, request):
        uow = request.unit_of_work
        product_id = request.GET.get("id", "")
        product = uow.product.get(id=int(product_id)) if product_id.isdigit() else None
        if product is None:
            return JsonResponse({"success": False, "message": "Error while deleting"})

        uow.product.remove(product)
        try:
            uow.save()
        except ProtectedError:
            uow.discard()
            return JsonResponse({"success": False, "message": "Product has orders and cannot be deleted"})

        logger.info(f"Deleted product {product_id}")
        return JsonResponse({"success": True, "message": "Delete Successful"})
