"""Repositories for each BulkyBook entity."""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Sequence, Tuple

from django.contrib.auth import get_user_model
from django.utils import timezone

from bulkybook.catalog.models import Category, Product, ProductImage
from bulkybook.core.models import Company
from bulkybook.store.models import OrderDetail, OrderHeader, ShoppingCart

from .repository import Repository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProductUpdate:
    """The mutable fields of a product.

    Anything not listed here (the identifier included) is never touched by
    ``ProductRepository.update``.
    """

    id: int
    title: str
    isbn: str
    author: str
    description: str
    list_price: Decimal
    price: Decimal
    price50: Decimal
    price100: Decimal
    category_id: int
    image_urls: Tuple[str, ...] = ()

    # Product columns written by an update
    FIELDS = (
        "title",
        "isbn",
        "price",
        "price50",
        "price100",
        "list_price",
        "description",
        "category",
        "author",
    )

    @classmethod
    def from_cleaned_data(cls, product_id: int, data: dict, image_urls: Sequence[str] = ()) -> "ProductUpdate":
        """Build an update request from a validated ``ProductForm``."""
        category = data["category"]
        return cls(
            id=product_id,
            title=data["title"],
            isbn=data["isbn"],
            author=data["author"],
            description=data.get("description", ""),
            list_price=data["list_price"],
            price=data["price"],
            price50=data["price50"],
            price100=data["price100"],
            category_id=getattr(category, "pk", category),
            image_urls=tuple(image_urls),
        )


class CategoryRepository(Repository):
    model = Category


class CompanyRepository(Repository):
    model = Company


class ProductImageRepository(Repository):
    model = ProductImage


class ProductRepository(Repository):
    """Product persistence with an explicit field allowlist on update."""

    model = Product

    def update(self, product_update: ProductUpdate) -> bool:
        """
        Copy the allowlisted fields of ``product_update`` onto the stored product.

        The image collection is replaced wholesale. Nothing is written until
        the unit of work is saved.

        Args:
            product_update: Target id and new field values

        Returns:
            True if the product exists, False if nothing matched the id
        """
        stored = self.get(id=product_update.id)
        if stored is None:
            logger.debug(f"Product {product_update.id} not found, update skipped")
            return False

        stored.title = product_update.title
        stored.isbn = product_update.isbn
        stored.price = product_update.price
        stored.price50 = product_update.price50
        stored.price100 = product_update.price100
        stored.list_price = product_update.list_price
        stored.description = product_update.description
        stored.category_id = product_update.category_id
        stored.author = product_update.author

        image_urls = list(product_update.image_urls)

        def replace_images(using):
            ProductImage.objects.using(using).filter(product_id=stored.pk).delete()
            ProductImage.objects.using(using).bulk_create(
                [ProductImage(product_id=stored.pk, image_url=url) for url in image_urls]
            )

        self._unit_of_work.register_dirty(
            stored,
            update_fields=ProductUpdate.FIELDS,
            after_save=replace_images,
        )
        return True


class ShoppingCartRepository(Repository):
    model = ShoppingCart

    def count_for_user(self, user) -> int:
        """Number of cart lines held by ``user``."""
        return self._queryset().filter(application_user=user).count()


class OrderHeaderRepository(Repository):
    model = OrderHeader

    def update_status(self, order_id: int, order_status: str, payment_status: Optional[str] = None) -> bool:
        """Set the order status and, when given, the payment status."""
        order = self.get(id=order_id)
        if order is None:
            return False

        order.order_status = order_status
        fields = ["order_status"]
        if payment_status:
            order.payment_status = payment_status
            fields.append("payment_status")

        self._unit_of_work.register_dirty(order, update_fields=fields)
        return True

    def update_stripe_payment_id(
        self,
        order_id: int,
        session_id: Optional[str],
        payment_intent_id: Optional[str],
    ) -> bool:
        """Record the Stripe session and, once paid, the payment intent."""
        order = self.get(id=order_id)
        if order is None:
            return False

        fields = []
        if session_id:
            order.session_id = session_id
            fields.append("session_id")
        if payment_intent_id:
            order.payment_intent_id = payment_intent_id
            order.payment_date = timezone.now()
            fields.extend(["payment_intent_id", "payment_date"])

        if fields:
            self._unit_of_work.register_dirty(order, update_fields=fields)
        return True


class OrderDetailRepository(Repository):
    model = OrderDetail


class ApplicationUserRepository(Repository):
    """Read access to application users."""

    @property
    def model(self):
        return get_user_model()
