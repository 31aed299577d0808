# Initial catalog schema

from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


def price_validators():
    return [
        django.core.validators.MinValueValidator(Decimal("1")),
        django.core.validators.MaxValueValidator(Decimal("1000")),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Category",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=30)),
                (
                    "display_order",
                    models.PositiveIntegerField(
                        validators=[
                            django.core.validators.MinValueValidator(1),
                            django.core.validators.MaxValueValidator(100),
                        ]
                    ),
                ),
            ],
            options={
                "ordering": ["display_order", "name"],
                "verbose_name_plural": "categories",
            },
        ),
        migrations.CreateModel(
            name="Product",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=200)),
                ("description", models.TextField(blank=True)),
                ("isbn", models.CharField(max_length=20, verbose_name="ISBN")),
                ("author", models.CharField(max_length=150)),
                (
                    "list_price",
                    models.DecimalField(decimal_places=2, max_digits=8, validators=price_validators(), verbose_name="list price"),
                ),
                (
                    "price",
                    models.DecimalField(decimal_places=2, max_digits=8, validators=price_validators(), verbose_name="price for 1-50"),
                ),
                (
                    "price50",
                    models.DecimalField(decimal_places=2, max_digits=8, validators=price_validators(), verbose_name="price for 51-100"),
                ),
                (
                    "price100",
                    models.DecimalField(decimal_places=2, max_digits=8, validators=price_validators(), verbose_name="price for 100+"),
                ),
                (
                    "category",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="products",
                        to="catalog.category",
                    ),
                ),
            ],
            options={
                "ordering": ["title"],
            },
        ),
        migrations.CreateModel(
            name="ProductImage",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("image_url", models.CharField(max_length=500)),
                (
                    "product",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="images",
                        to="catalog.product",
                    ),
                ),
            ],
            options={
                "ordering": ["id"],
            },
        ),
    ]
