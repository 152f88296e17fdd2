"""Tests for converting a cart into an order."""

import pytest
from pydantic import ValidationError

from storefront.application.commerce_store import CommerceStore
from storefront.domain.errors import EmptyCart, InvalidDiscount
from storefront.domain.models import Product


def _place_order(store, user_id, product_id="p1", quantity=1):
    store.add_item_to_cart(user_id, product_id, quantity)
    return store.checkout(user_id)


class TestCheckoutWithoutDiscount:
    def test_builds_order_from_cart(self, store, clock):
        store.add_item_to_cart("alice", "p1", 1)
        store.add_item_to_cart("alice", "p2", 2)

        order = store.checkout("alice")

        assert order.id == 1
        assert order.user_id == "alice"
        assert [(i.product_id, i.quantity, i.price) for i in order.items] == [
            ("p1", 1, 1200),
            ("p2", 2, 150),
        ]
        assert order.subtotal == 1500
        assert order.discount_amount == 0
        assert order.total == 1500
        assert order.discount_code is None
        assert order.created_at.tzinfo is not None

    def test_deletes_cart(self, store):
        _place_order(store, "alice")
        assert store.get_cart("alice").items == []

    def test_order_numbers_are_sequential(self, store):
        ids = [_place_order(store, f"user{n}").id for n in range(5)]
        assert ids == [1, 2, 3, 4, 5]

    def test_does_not_touch_other_carts(self, store):
        store.add_item_to_cart("bob", "p3", 4)
        _place_order(store, "alice")
        assert store.get_cart("bob").items[0].quantity == 4

    def test_blank_code_is_ignored(self, store):
        store.add_item_to_cart("alice", "p3", 1)
        order = store.checkout("alice", "   ")
        assert order.discount_amount == 0
        assert order.discount_code is None

    def test_uses_catalog_prices(self, clock):
        store = CommerceStore(products=[Product(id="p1", name="Laptop", price=800)], clock=clock)
        store.add_item_to_cart("alice", "p1", 2)

        order = store.checkout("alice")

        assert order.items[0].price == 800
        assert order.subtotal == 1600


class TestCheckoutFailures:
    def test_empty_cart(self, store):
        with pytest.raises(EmptyCart) as exc:
            store.checkout("alice")
        assert exc.value.status_code == 400
        assert exc.value.message == "Cart is empty"
        assert store.get_metrics().total_items_purchased == 0
        assert _place_order(store, "bob").id == 1

    def test_second_checkout_of_same_cart_fails(self, store):
        _place_order(store, "alice")
        with pytest.raises(EmptyCart):
            store.checkout("alice")
        assert store.get_metrics().total_items_purchased == 1
        assert _place_order(store, "bob").id == 2

    def test_unknown_code_leaves_cart_and_orders_untouched(self, store):
        store.add_item_to_cart("alice", "p1", 1)
        with pytest.raises(InvalidDiscount):
            store.checkout("alice", "SAVE-3-NOPE")
        assert store.get_cart("alice").items[0].quantity == 1
        assert store.checkout("alice").id == 1


class TestOrderSnapshot:
    def test_returned_order_is_frozen(self, store):
        order = _place_order(store, "alice")
        with pytest.raises(ValidationError):
            order.total = 0

    def test_returned_order_items_are_copies(self, store):
        order = _place_order(store, "alice")
        order.items.clear()
        assert store.get_metrics().total_items_purchased == 1


class TestDiscountCodeMatching:
    def test_padded_code_does_not_match(self, store):
        for user_id in ("u1", "u2"):
            _place_order(store, user_id)
        discount = store.generate_discount_code()
        store.add_item_to_cart("alice", "p3", 1)

        with pytest.raises(InvalidDiscount):
            store.checkout("alice", f"  {discount.code}  ")

        order = store.checkout("alice", discount.code)
        assert order.discount_code == discount.code
