"""
Tests for the cart service
"""

from concurrent.futures import ThreadPoolExecutor

import pytest

from harvest_direct.core.errors import InvalidRequest, StorageUnavailable
from harvest_direct.database.carts import InMemoryCartBackend
from harvest_direct.models.cart import StoredCart
from harvest_direct.services.cart_service import CartService

from .conftest import CART_TTL, SHIPPING_FEE, make_product


def quantities(view):
    """Map product id to quantity for a cart view"""
    return {item.product.id: item.quantity for item in view.items}


class TestGetCart:
    """Tests for reading carts."""

    def test_new_session_has_empty_cart(self, cart_service):
        """An unseen token reads as an empty cart with zero totals."""
        view = cart_service.get_cart("never-seen")

        assert view.session_id == "never-seen"
        assert view.items == []
        assert view.total_items == 0
        assert view.subtotal == 0
        assert view.shipping == 0
        assert view.total == 0

    def test_first_read_creates_cart(self, cart_service, cart_backend):
        cart_service.get_cart("s1")
        assert cart_backend.get("s1") is not None

    def test_read_is_idempotent(self, cart_service):
        """Two reads with no mutation in between are identical."""
        cart_service.add_item("s1", 1, 2)
        cart_service.add_item("s1", 5, 1)

        assert cart_service.get_cart("s1") == cart_service.get_cart("s1")

    def test_prices_come_from_catalog_at_read_time(self, cart_service, catalog):
        """A price change shows up in carts that already hold the product."""
        cart_service.add_item("s1", 1, 2)

        catalog.add_product(make_product(1, stock=100, price=20.0))

        view = cart_service.get_cart("s1")
        assert view.items[0].product.price == 20.0
        assert view.subtotal == 40.0

    def test_stale_product_is_dropped_and_pruned(self, cart_service, cart_backend, catalog):
        """A product deleted from the catalog disappears from the cart."""
        cart_service.add_item("s1", 1, 2)
        cart_service.add_item("s1", 3, 1)

        catalog.delete_product(1)
        view = cart_service.get_cart("s1")

        assert quantities(view) == {3: 1}
        assert view.total_items == 1
        assert view.subtotal == 9.25
        assert [line.product_id for line in cart_backend.get("s1").items] == [3]

    def test_cart_of_only_stale_products_has_no_shipping(self, cart_service, catalog):
        cart_service.add_item("s1", 2, 1)
        catalog.delete_product(2)

        view = cart_service.get_cart("s1")
        assert view.items == []
        assert view.shipping == 0
        assert view.total == 0


class TestAddItem:
    """Tests for adding items."""

    def test_quantities_merge(self, cart_service):
        """Adding the same product twice yields one line with the sum."""
        cart_service.add_item("s1", 1, 2)
        view = cart_service.add_item("s1", 1, 3)

        assert len(view.items) == 1
        assert view.items[0].quantity == 5

    def test_new_items_append_in_order(self, cart_service):
        cart_service.add_item("s1", 4, 1)
        cart_service.add_item("s1", 2, 1)
        cart_service.add_item("s1", 4, 1)
        view = cart_service.add_item("s1", 9, 1)

        assert [item.product.id for item in view.items] == [4, 2, 9]

    def test_default_quantity_is_one(self, cart_service):
        view = cart_service.add_item("s1", 1)
        assert view.items[0].quantity == 1

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_non_positive_quantity_rejected(self, cart_service, quantity):
        with pytest.raises(InvalidRequest):
            cart_service.add_item("s1", 1, quantity)
        assert cart_service.get_cart("s1").items == []

    def test_unknown_product_rejected(self, cart_service):
        with pytest.raises(InvalidRequest):
            cart_service.add_item("s1", 999, 1)
        assert cart_service.get_cart("s1").items == []

    def test_adding_does_not_touch_stock(self, cart_service, catalog):
        """Carts never reserve stock."""
        cart_service.add_item("s1", 1, 7)
        assert catalog.get_product(1).stock_quantity == 100

    def test_sessions_are_independent(self, cart_service):
        cart_service.add_item("s1", 1, 1)
        cart_service.add_item("s2", 2, 4)

        assert quantities(cart_service.get_cart("s1")) == {1: 1}
        assert quantities(cart_service.get_cart("s2")) == {2: 4}


class TestUpdateAndRemove:
    """Tests for updating and removing items."""

    def test_update_replaces_quantity_in_place(self, cart_service):
        cart_service.add_item("s1", 1, 1)
        cart_service.add_item("s1", 2, 1)
        cart_service.add_item("s1", 3, 1)

        view = cart_service.update_item_quantity("s1", 2, 7)

        assert [item.product.id for item in view.items] == [1, 2, 3]
        assert quantities(view) == {1: 1, 2: 7, 3: 1}

    @pytest.mark.parametrize("quantity", [0, -3])
    def test_update_below_one_removes(self, cart_service, quantity):
        """Setting quantity to zero or less is the same as removing."""
        cart_service.add_item("s1", 1, 2)
        cart_service.add_item("s1", 3, 1)

        view = cart_service.update_item_quantity("s1", 1, quantity)

        assert quantities(view) == {3: 1}
        assert view == cart_service.get_cart("s1")

    def test_update_missing_product_is_noop(self, cart_service):
        """A late update for a product not in the cart changes nothing."""
        cart_service.add_item("s1", 1, 2)
        before = cart_service.get_cart("s1")

        after = cart_service.update_item_quantity("s1", 5, 3)

        assert after == before

    def test_remove(self, cart_service):
        cart_service.add_item("s1", 1, 2)
        cart_service.add_item("s1", 3, 1)

        view = cart_service.remove_item("s1", 1)
        assert quantities(view) == {3: 1}

    def test_remove_missing_product_is_noop(self, cart_service):
        cart_service.add_item("s1", 1, 2)
        before = cart_service.get_cart("s1")

        after = cart_service.remove_item("s1", 8)

        assert after == before

    def test_remove_on_new_session(self, cart_service):
        view = cart_service.remove_item("fresh", 1)
        assert view.items == []

    def test_clear_cart(self, cart_service):
        cart_service.add_item("s1", 1, 2)
        cart_service.add_item("s1", 3, 1)

        view = cart_service.clear_cart("s1")

        assert view.items == []
        assert view.total == 0


class TestTotals:
    """Tests for derived totals."""

    def test_checkout_scenario(self, cart_service):
        """Coffee and cardamom, then coffee removed by setting it to zero."""
        cart_service.add_item("s1", 1, 2)   # 12.50 each
        view = cart_service.add_item("s1", 3, 1)   # 9.25

        assert view.subtotal == 34.25
        assert view.shipping == SHIPPING_FEE
        assert view.total == 40.24
        assert view.total_items == 3

        view = cart_service.update_item_quantity("s1", 1, 0)

        assert quantities(view) == {3: 1}
        assert view.subtotal == 9.25
        assert view.total == 15.24

    def test_totals_are_consistent(self, cart_service):
        for product_id, quantity in [(1, 3), (2, 1), (5, 2), (2, 4), (12, 1)]:
            view = cart_service.add_item("s1", product_id, quantity)

            assert view.total_items == sum(item.quantity for item in view.items)
            assert view.total == round(view.subtotal + view.shipping, 2)
            assert view.shipping == SHIPPING_FEE

    def test_line_total(self, cart_service):
        view = cart_service.add_item("s1", 2, 3)   # 8.95
        assert view.items[0].line_total == 26.85


class TestConcurrency:
    """Tests for per-session serialization."""

    def test_concurrent_adds_lose_no_update(self, cart_service):
        """Interleaved adds to one session all land."""
        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(lambda _: cart_service.add_item("shared", 1, 1), range(200)))

        assert quantities(cart_service.get_cart("shared")) == {1: 200}

    def test_concurrent_sessions(self, cart_service):
        sessions = [f"s{i}" for i in range(10)]

        def fill(session_id):
            for _ in range(20):
                cart_service.add_item(session_id, 3, 1)

        with ThreadPoolExecutor(max_workers=10) as pool:
            list(pool.map(fill, sessions))

        for session_id in sessions:
            assert cart_service.get_cart(session_id).total_items == 20
        assert len(cart_service._locks) == 0


class TestStorage:
    """Tests for interaction with the storage backend."""

    def test_writes_purge_expired_carts(self, cart_service, cart_backend, clock):
        """Expired carts are swept on a later write."""
        cart_service.add_item("idle", 1, 1)
        clock.advance(CART_TTL + 1)

        cart_service.add_item("active", 1, 1)

        assert len(cart_backend) == 1
        assert cart_service.get_cart("idle").items == []

    def test_storage_failure_propagates(self, catalog):
        """Backend outages surface as StorageUnavailable."""

        class DownBackend(InMemoryCartBackend):
            def get(self, session_id):
                raise StorageUnavailable("cart store unreachable")

        service = CartService(DownBackend(), catalog, shipping_fee=SHIPPING_FEE)

        with pytest.raises(StorageUnavailable):
            service.get_cart("s1")
        assert len(service._locks) == 0

    def test_swappable_backend(self, catalog):
        """Any CartBackend implementation can hold the carts."""
        writes = []

        class RecordingBackend(InMemoryCartBackend):
            def put(self, cart: StoredCart) -> None:
                writes.append([line.product_id for line in cart.items])
                super().put(cart)

        service = CartService(RecordingBackend(), catalog, shipping_fee=SHIPPING_FEE)
        service.add_item("s1", 1, 1)
        service.add_item("s1", 2, 1)

        assert writes[-1] == [1, 2]
