"""Store models: shopping carts, order headers and order lines."""

from decimal import Decimal

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils import timezone

from bulkybook.catalog.models import Product


class OrderStatus(models.TextChoices):
    PENDING = "Pending", "Pending"
    APPROVED = "Approved", "Approved"
    PROCESSING = "Processing", "Processing"
    SHIPPED = "Shipped", "Shipped"
    CANCELLED = "Cancelled", "Cancelled"
    REFUNDED = "Refunded", "Refunded"


class PaymentStatus(models.TextChoices):
    PENDING = "Pending", "Pending"
    APPROVED = "Approved", "Approved"
    DELAYED = "ApprovedForDelayedPayment", "Approved for delayed payment"
    REJECTED = "Rejected", "Rejected"
    CANCELLED = "Cancelled", "Cancelled"
    REFUNDED = "Refunded", "Refunded"


class ShoppingCart(models.Model):
    """One cart line: a product and a count for a user."""

    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="cart_lines")
    count = models.PositiveIntegerField(validators=[MinValueValidator(1), MaxValueValidator(1000)])
    application_user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="cart_lines",
    )

    class Meta:
        ordering = ["id"]

    def __str__(self):
        return f"{self.count} x {self.product}"

    @property
    def unit_price(self) -> Decimal:
        return self.product.price_for_quantity(self.count)

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.count


class OrderHeader(models.Model):
    """A checkout transaction. Orders are never hard-deleted."""

    application_user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="orders",
    )
    order_date = models.DateTimeField(default=timezone.now)
    shipping_date = models.DateTimeField(null=True, blank=True)
    order_total = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0"))

    order_status = models.CharField(max_length=30, choices=OrderStatus.choices, default=OrderStatus.PENDING)
    payment_status = models.CharField(max_length=30, choices=PaymentStatus.choices, default=PaymentStatus.PENDING)
    tracking_number = models.CharField(max_length=100, blank=True)
    carrier = models.CharField(max_length=100, blank=True)

    payment_date = models.DateTimeField(null=True, blank=True)
    payment_due_date = models.DateField(null=True, blank=True)

    # Stripe checkout session and payment intent
    session_id = models.CharField(max_length=255, blank=True)
    payment_intent_id = models.CharField(max_length=255, blank=True)

    name = models.CharField(max_length=150)
    phone_number = models.CharField(max_length=30)
    street_address = models.CharField(max_length=200)
    city = models.CharField(max_length=100)
    state = models.CharField(max_length=100)
    postal_code = models.CharField(max_length=20)

    class Meta:
        ordering = ["-order_date", "-id"]

    def __str__(self):
        return f"Order {self.pk} ({self.order_status})"

    @property
    def is_delayed_payment(self):
        return self.payment_status == PaymentStatus.DELAYED


class OrderDetail(models.Model):
    """An order line, priced at checkout time."""

    order_header = models.ForeignKey(OrderHeader, on_delete=models.CASCADE, related_name="details")
    product = models.ForeignKey(Product, on_delete=models.PROTECT, related_name="order_lines")
    count = models.PositiveIntegerField()
    price = models.DecimalField(max_digits=8, decimal_places=2)

    class Meta:
        ordering = ["id"]

    def __str__(self):
        return f"{self.count} x {self.product} @ {self.price}"

    @property
    def line_total(self) -> Decimal:
        return self.price * self.count
