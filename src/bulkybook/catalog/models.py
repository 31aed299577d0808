"""Catalog models: categories, products and product images."""

from decimal import Decimal

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

PRICE_VALIDATORS = [MinValueValidator(Decimal("1")), MaxValueValidator(Decimal("1000"))]


class Category(models.Model):
    """Product classification."""

    name = models.CharField(max_length=30)
    display_order = models.PositiveIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(100)],
    )

    class Meta:
        ordering = ["display_order", "name"]
        verbose_name_plural = "categories"

    def __str__(self):
        return self.name


class Product(models.Model):
    """A book in the catalog, with quantity price tiers."""

    title = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    isbn = models.CharField("ISBN", max_length=20)
    author = models.CharField(max_length=150)

    list_price = models.DecimalField("list price", max_digits=8, decimal_places=2, validators=PRICE_VALIDATORS)
    price = models.DecimalField("price for 1-50", max_digits=8, decimal_places=2, validators=PRICE_VALIDATORS)
    price50 = models.DecimalField("price for 51-100", max_digits=8, decimal_places=2, validators=PRICE_VALIDATORS)
    price100 = models.DecimalField("price for 100+", max_digits=8, decimal_places=2, validators=PRICE_VALIDATORS)

    category = models.ForeignKey(Category, on_delete=models.PROTECT, related_name="products")

    class Meta:
        ordering = ["title"]

    def __str__(self):
        return self.title

    def price_for_quantity(self, count: int) -> Decimal:
        """Unit price for an order line of ``count`` copies."""
        if count <= 50:
            return self.price
        if count <= 100:
            return self.price50
        return self.price100

    @property
    def image_urls(self):
        return [image.image_url for image in self.images.all()]


class ProductImage(models.Model):
    """An image owned by a single product."""

    image_url = models.CharField(max_length=500)
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="images")

    class Meta:
        ordering = ["id"]

    def __str__(self):
        return self.image_url
