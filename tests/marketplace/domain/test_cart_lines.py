"""Tests for ShoppingCart line management."""

import pytest
from protean.exceptions import ValidationError

from marketplace.cart.cart import ShoppingCart
from marketplace.cart.events import CartCleared, CartItemAdded, CartItemRemoved, CartQuantityUpdated
from marketplace.shared.errors import NotFound


@pytest.fixture()
def cart():
    return ShoppingCart.create(buyer_id="cust1")


class TestAddItem:
    def test_new_product_gets_a_line(self, cart):
        cart.add_item("p1", quantity=2)
        assert cart.lines() == [("p1", 2)]

    def test_default_quantity_is_one(self, cart):
        cart.add_item("p1")
        assert cart.lines() == [("p1", 1)]

    def test_adding_again_sums_into_the_same_line(self, cart):
        cart.add_item("p1", quantity=2)
        cart.add_item("p1", quantity=3)
        assert cart.lines() == [("p1", 5)]

    def test_event_carries_line_quantity(self, cart):
        cart.add_item("p1", quantity=2)
        cart.add_item("p1", quantity=1)
        event = cart._events[-1]
        assert isinstance(event, CartItemAdded)
        assert event.quantity == 1
        assert event.line_quantity == 3

    def test_quantity_must_be_positive(self, cart):
        with pytest.raises(ValidationError):
            cart.add_item("p1", quantity=0)
        assert cart.is_empty


class TestSetQuantity:
    def test_replaces_quantity(self, cart):
        cart.add_item("p1", quantity=2)
        cart.set_quantity("p1", 7)
        assert cart.lines() == [("p1", 7)]
        assert isinstance(cart._events[-1], CartQuantityUpdated)

    def test_has_no_upper_bound(self, cart):
        cart.add_item("p1")
        cart.set_quantity("p1", 500)
        assert cart.lines() == [("p1", 500)]

    def test_missing_line_raises_not_found(self, cart):
        with pytest.raises(NotFound):
            cart.set_quantity("p9", 2)

    def test_zero_is_rejected(self, cart):
        cart.add_item("p1", quantity=2)
        with pytest.raises(ValidationError):
            cart.set_quantity("p1", 0)
        assert cart.lines() == [("p1", 2)]


class TestRemoveAndClear:
    def test_remove_line(self, cart):
        cart.add_item("p1")
        cart.add_item("p2")

        assert cart.remove_item("p1") is True

        assert cart.lines() == [("p2", 1)]
        assert isinstance(cart._events[-1], CartItemRemoved)

    def test_removing_absent_product_is_a_no_op(self, cart):
        cart.add_item("p1")
        cart._events.clear()

        assert cart.remove_item("p9") is False

        assert cart.lines() == [("p1", 1)]
        assert cart._events == []

    def test_clear_empties_cart(self, cart):
        cart.add_item("p1")
        cart.add_item("p2", quantity=4)

        cart.clear()

        assert cart.is_empty
        assert isinstance(cart._events[-1], CartCleared)
