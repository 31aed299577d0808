"""Tests for ProductRepository.update and the unit of work."""

from decimal import Decimal

import pytest

from bulkybook.catalog.models import Category, Product
from bulkybook.data import ProductUpdate, UnitOfWork


@pytest.fixture
def other_category(db):
    return Category.objects.create(name="History", display_order=2)


def make_update(product, **changes):
    values = {
        "id": product.pk,
        "title": product.title,
        "isbn": product.isbn,
        "author": product.author,
        "description": product.description,
        "list_price": product.list_price,
        "price": product.price,
        "price50": product.price50,
        "price100": product.price100,
        "category_id": product.category_id,
        "image_urls": tuple(product.image_urls),
    }
    values.update(changes)
    return ProductUpdate(**values)


class TestProductUpdate:
    def test_found_product_is_updated_on_save(self, product, other_category):
        uow = UnitOfWork()

        found = uow.product.update(
            make_update(
                product,
                title="Rock in the Ocean",
                author="Ron Parker",
                price=Decimal("30.00"),
                price50=Decimal("25.00"),
                price100=Decimal("20.00"),
                category_id=other_category.pk,
            )
        )
        uow.save()

        assert found is True
        stored = Product.objects.get(pk=product.pk)
        assert stored.title == "Rock in the Ocean"
        assert stored.author == "Ron Parker"
        assert stored.price == Decimal("30.00")
        assert stored.price50 == Decimal("25.00")
        assert stored.price100 == Decimal("20.00")
        assert stored.category_id == other_category.pk
        assert stored.isbn == product.isbn

    def test_nothing_is_written_before_save(self, product):
        uow = UnitOfWork()

        uow.product.update(make_update(product, title="Pending title", image_urls=()))

        stored = Product.objects.get(pk=product.pk)
        assert stored.title == "Fortune of Time"
        assert stored.images.count() == 2
        assert uow.has_changes

    def test_discard_drops_pending_update(self, product):
        uow = UnitOfWork()
        uow.product.update(make_update(product, title="Never saved"))

        uow.discard()
        uow.save()

        assert Product.objects.get(pk=product.pk).title == "Fortune of Time"

    def test_missing_product_returns_false(self, product):
        uow = UnitOfWork()

        found = uow.product.update(make_update(product, id=product.pk + 1000, title="Ghost"))
        uow.save()

        assert found is False
        assert not uow.has_changes
        assert not Product.objects.filter(title="Ghost").exists()
        assert Product.objects.get(pk=product.pk).title == "Fortune of Time"

    def test_images_are_replaced_wholesale(self, product):
        uow = UnitOfWork()

        uow.product.update(make_update(product, image_urls=("/images/product/new.jpg",)))
        uow.save()

        assert Product.objects.get(pk=product.pk).image_urls == ["/images/product/new.jpg"]

    def test_empty_image_list_removes_all_images(self, product):
        uow = UnitOfWork()

        uow.product.update(make_update(product, image_urls=()))
        uow.save()

        assert Product.objects.get(pk=product.pk).images.count() == 0

    def test_other_products_are_untouched(self, product, category):
        neighbour = Product.objects.create(
            title="Dark Skies",
            isbn="CAW777777701",
            author="Julian Button",
            list_price=Decimal("40.00"),
            price=Decimal("30.00"),
            price50=Decimal("25.00"),
            price100=Decimal("20.00"),
            category=category,
        )
        uow = UnitOfWork()

        uow.product.update(make_update(product, title="Changed"))
        uow.save()

        neighbour.refresh_from_db()
        assert neighbour.title == "Dark Skies"

    def test_last_writer_wins(self, product):
        first = UnitOfWork()
        second = UnitOfWork()

        first.product.update(make_update(product, title="First"))
        second.product.update(make_update(product, title="Second"))
        first.save()
        second.save()

        assert Product.objects.get(pk=product.pk).title == "Second"

    def test_from_cleaned_data_keeps_only_known_fields(self, product, category):
        data = {
            "title": "From form",
            "isbn": "X1",
            "author": "A. Writer",
            "description": "",
            "list_price": Decimal("10.00"),
            "price": Decimal("9.00"),
            "price50": Decimal("8.00"),
            "price100": Decimal("7.00"),
            "category": category,
        }

        update = ProductUpdate.from_cleaned_data(product.pk, data, ["/a.jpg", "/b.jpg"])

        assert update.id == product.pk
        assert update.category_id == category.pk
        assert update.image_urls == ("/a.jpg", "/b.jpg")


class TestRepositoryReads:
    def test_include_loads_nested_relations(self, product, django_assert_num_queries):
        uow = UnitOfWork()

        loaded = uow.product.get(id=product.pk, include="category,images")
        with django_assert_num_queries(0):
            assert loaded.category.name == "Fiction"
            assert len(loaded.image_urls) == 2

    def test_get_returns_none_when_missing(self, db):
        assert UnitOfWork().category.get(id=42) is None

    def test_get_all_filters(self, product, category):
        uow = UnitOfWork()

        assert uow.product.get_all(category=category) == [product]
        assert uow.product.get_all(title="Nope") == []


class TestPriceTiers:
    @pytest.mark.parametrize(
        "count, expected",
        [
            (1, Decimal("90.00")),
            (50, Decimal("90.00")),
            (51, Decimal("85.00")),
            (100, Decimal("85.00")),
            (101, Decimal("80.00")),
        ],
    )
    def test_price_for_quantity(self, product, count, expected):
        assert product.price_for_quantity(count) == expected
