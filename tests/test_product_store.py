"""Tests for the in-memory product store."""

import threading

import pytest

from product_archive_api.app.schemas.product import Product
from product_archive_api.app.services.product_store import ProductStore


def make_product(product_id=10, name="widget", quantity=5, price=9.5, image_uri=None):
    return Product(id=product_id, name=name, quantity=quantity, price=price, image_uri=image_uri)


@pytest.mark.unit
class TestListAndFind:
    """Listing and lookups."""

    def test_empty_store_lists_none(self):
        """An empty store reports absence rather than an empty list."""
        assert ProductStore().list_products() is None

    def test_sample_products(self, store):
        products = store.list_products()
        assert [p.id for p in products] == [1, 2, 3]
        assert products[0].name == "aproduct 1"
        assert products[2].price == 3000

    def test_add_then_find_returns_same_fields(self):
        store = ProductStore()
        original = make_product(image_uri="http://img/1.png")
        store.add(original)

        found = store.find_by_id(10)

        assert found.model_dump() == original.model_dump()

    def test_add_then_list_includes_product(self, store):
        store.add(make_product())
        assert any(p.id == 10 for p in store.list_products())

    def test_find_missing_returns_none(self, store):
        assert store.find_by_id(99) is None

    def test_find_returns_first_of_duplicates(self):
        store = ProductStore()
        store.add(make_product(product_id=7, name="first"))
        store.add(make_product(product_id=7, name="second"))

        assert store.find_by_id(7).name == "first"

    def test_add_stores_a_copy(self):
        store = ProductStore()
        product = make_product()
        store.add(product)
        product.name = "changed"

        assert store.find_by_id(10).name == "widget"

    def test_returned_products_are_copies(self, store):
        store.find_by_id(1).name = "changed"
        store.list_products()[1].name = "changed"
        store.search("c")[0].name = "changed"
        store.group_by_id()[1][0].price = -1

        assert [p.name for p in store.list_products()] == ["aproduct 1", "bproduct 2", "cproduct 3"]
        assert store.find_by_id(1).price == 1000

    def test_update_stores_a_copy(self, store):
        replacement = make_product(product_id=2, name="new")
        store.update(2, replacement)
        replacement.name = "changed"

        assert store.find_by_id(2).name == "new"

    def test_search_by_prefix(self, store):
        store.add(make_product(name="apple"))
        assert [p.name for p in store.search("a")] == ["aproduct 1", "apple"]
        assert store.search("zzz") == []


@pytest.mark.unit
class TestDelete:
    """Deleting by id."""

    def test_delete_missing_returns_false(self, store):
        assert store.delete(42) is False
        assert len(store.list_products()) == 3

    def test_delete_removes_all_matches(self):
        store = ProductStore()
        store.add(make_product(product_id=5, name="a"))
        store.add(make_product(product_id=6, name="b"))
        store.add(make_product(product_id=5, name="c"))

        assert store.delete(5) is True
        assert [p.name for p in store.list_products()] == ["b"]

    def test_delete_last_product_empties_store(self):
        store = ProductStore([make_product()])
        store.delete(10)
        assert store.list_products() is None


@pytest.mark.unit
class TestUpdate:
    """Updating in place, including the unknown-id behaviour."""

    def test_update_existing_replaces_in_place(self, store):
        replacement = make_product(product_id=2, name="new", quantity=1, price=1.0)

        summary = store.update(2, replacement)

        assert summary.id == 2
        assert summary.name == "new"
        products = store.list_products()
        assert products[1].model_dump() == replacement.model_dump()
        assert [p.id for p in products] == [1, 2, 3]

    def test_update_summary_is_separate_object(self, store):
        replacement = make_product(product_id=2, image_uri="img")
        summary = store.update(2, replacement)

        assert summary is not replacement
        assert summary.image_uri is None

    def test_update_missing_id_overwrites_index_zero(self, store):
        """Unknown ids replace the first product and report id 0."""
        replacement = make_product(product_id=77, name="stray")

        summary = store.update(77, replacement)

        assert summary.id == 0
        assert summary.name == "stray"
        products = store.list_products()
        assert products[0].model_dump() == replacement.model_dump()
        assert products[0].id == 77
        assert [p.id for p in products[1:]] == [2, 3]

    def test_update_on_empty_store_returns_none(self):
        store = ProductStore()
        assert store.update(1, make_product(product_id=1)) is None
        assert store.list_products() is None


@pytest.mark.unit
class TestGrouping:
    """Group-by views keep insertion order inside each group."""

    def test_group_by_name(self):
        store = ProductStore()
        store.add(make_product(product_id=1, name="x"))
        store.add(make_product(product_id=2, name="y"))
        store.add(make_product(product_id=3, name="x"))

        groups = store.group_by_name()

        assert list(groups) == ["x", "y"]
        assert [p.id for p in groups["x"]] == [1, 3]

    def test_group_by_price_quantity_and_id(self, store):
        store.add(make_product(product_id=1, quantity=10, price=1000))

        assert [p.id for p in store.group_by_price()[1000]] == [1, 1]
        assert [p.id for p in store.group_by_quantity()[10]] == [1, 1]
        assert len(store.group_by_id()[1]) == 2
        assert set(store.group_by_id()) == {1, 2, 3}

    def test_group_on_empty_store(self):
        assert ProductStore().group_by_name() == {}


@pytest.mark.unit
def test_concurrent_adds_are_not_lost():
    store = ProductStore()

    def worker(offset):
        for i in range(200):
            store.add(make_product(product_id=offset + i))

    threads = [threading.Thread(target=worker, args=(n * 1000,)) for n in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(store.list_products()) == 800
