"""Tests for fulfilling, cancelling and confirming orders."""

import pytest
from protean import current_domain

from marketplace.account.account import Account
from marketplace.catalogue.product import Product
from marketplace.ledger.order import Order, OrderStatus


def _order(order_id):
    return current_domain.repository_for(Order).get(order_id)


def _balance(account_id):
    return current_domain.repository_for(Account).get(account_id).wallet


@pytest.fixture()
def paid_order_id(service, buyer, vendor_a, make_product):
    make_product("pa", vendor_id="vendor-a", price=500)
    service.add_to_cart("buyer1", "pa", 2)
    return service.checkout("buyer1").data["order_ids"][0]


@pytest.fixture()
def pending_order_id(buyer, vendor_a, make_product):
    product = make_product("pp", vendor_id="vendor-a", price=500)
    order = Order.place(product, buyer_id="buyer1", quantity=1, paid=False)
    current_domain.repository_for(Order).add(order)
    return str(order.id)


class TestFulfillment:
    def test_vendor_fulfills_own_order(self, service, paid_order_id):
        result = service.fulfill_order("vendor-a", paid_order_id)

        assert result.ok is True
        assert _order(paid_order_id).status == OrderStatus.FULFILLED.value

    def test_admin_fulfills_any_order(self, service, admin, paid_order_id):
        assert service.fulfill_order("admin1", paid_order_id).ok is True

    def test_other_vendor_is_denied(self, service, vendor_b, paid_order_id):
        result = service.fulfill_order("vendor-b", paid_order_id)

        assert result.reason == "PermissionDenied"
        assert _order(paid_order_id).status == OrderStatus.PAID.value

    def test_customer_is_denied(self, service, paid_order_id):
        assert service.fulfill_order("buyer1", paid_order_id).reason == "PermissionDenied"

    def test_cannot_fulfill_twice(self, service, paid_order_id):
        service.fulfill_order("vendor-a", paid_order_id)
        assert service.fulfill_order("vendor-a", paid_order_id).reason == "InvalidTransition"

    def test_unknown_order(self, service, vendor_a):
        assert service.fulfill_order("vendor-a", "missing").reason == "NotFound"


class TestCancellation:
    def test_cancelling_paid_order_refunds_buyer(self, service, paid_order_id):
        assert _balance("buyer1") == 1000
        assert _balance("vendor-a") == 1000

        result = service.cancel_order("vendor-a", paid_order_id, reason="Sold out")

        assert result.ok is True
        assert result.data["refunded"] == 1000
        assert _balance("buyer1") == 2000
        assert _balance("vendor-a") == 0
        order = _order(paid_order_id)
        assert order.status == OrderStatus.CANCELLED.value
        assert order.cancellation_reason == "Sold out"

    def test_refund_needs_vendor_funds(self, service, paid_order_id):
        vendor = current_domain.repository_for(Account).get("vendor-a")
        vendor.debit(600)
        current_domain.repository_for(Account).add(vendor)

        result = service.cancel_order("vendor-a", paid_order_id)

        assert result.reason == "InsufficientFunds"
        assert _order(paid_order_id).status == OrderStatus.PAID.value
        assert _balance("buyer1") == 1000

    def test_cancelling_pending_order_moves_no_money(self, service, pending_order_id):
        result = service.cancel_order("vendor-a", pending_order_id)

        assert result.data["refunded"] == 0
        assert _balance("buyer1") == 2000
        assert _order(pending_order_id).status == OrderStatus.CANCELLED.value

    def test_fulfilled_orders_cannot_be_cancelled(self, service, paid_order_id):
        service.fulfill_order("vendor-a", paid_order_id)
        assert service.cancel_order("vendor-a", paid_order_id).reason == "InvalidTransition"


class TestMarkPaid:
    def test_admin_marks_pending_order_paid(self, service, admin, pending_order_id):
        assert service.mark_paid("admin1", pending_order_id).ok is True
        assert _order(pending_order_id).status == OrderStatus.PAID.value

    def test_vendor_cannot_mark_paid(self, service, pending_order_id):
        assert service.mark_paid("vendor-a", pending_order_id).reason == "PermissionDenied"


class TestOrderQueries:
    def test_vendor_orders_by_status(self, service, paid_order_id, pending_order_id):
        paid = service.vendor_orders("vendor-a", status=OrderStatus.PAID.value)
        assert [o["id"] for o in paid] == [paid_order_id]
        assert len(service.vendor_orders("vendor-a")) == 2

    def test_buyer_orders(self, service, paid_order_id):
        assert [o["id"] for o in service.buyer_orders("buyer1")] == [paid_order_id]

    def test_price_edit_does_not_touch_orders(self, service, paid_order_id):
        product = current_domain.repository_for(Product).get("pa")
        product.change_price(9999)
        current_domain.repository_for(Product).add(product)

        assert _order(paid_order_id).amount == 1000
