"""Tests for checkout through MarketplaceService."""

import pytest
from protean import current_domain

from marketplace.account.account import Account
from marketplace.cart.items import find_cart
from marketplace.ledger.order import Order, OrderStatus


def _balance(account_id):
    return current_domain.repository_for(Account).get(account_id).wallet


def _all_orders():
    return current_domain.repository_for(Order)._dao.query.all().items


@pytest.fixture()
def two_vendor_cart(service, buyer, vendor_a, vendor_b, make_product):
    make_product("pa", vendor_id="vendor-a", price=500)
    make_product("pb", vendor_id="vendor-b", price=300)
    service.add_to_cart("buyer1", "pa", 2)
    service.add_to_cart("buyer1", "pb", 1)


class TestSuccessfulCheckout:
    def test_two_vendor_checkout_settles_wallets(self, service, two_vendor_cart):
        result = service.checkout("buyer1")

        assert result.ok is True
        assert result.data["total"] == 1300
        assert result.data["balance"] == 700
        assert _balance("buyer1") == 700
        assert _balance("vendor-a") == 1000
        assert _balance("vendor-b") == 300

    def test_creates_one_paid_order_per_line(self, service, two_vendor_cart):
        result = service.checkout("buyer1")

        orders = _all_orders()
        assert len(orders) == 2
        assert {o.status for o in orders} == {OrderStatus.PAID.value}
        assert sorted(str(o.id) for o in orders) == sorted(result.data["order_ids"])
        assert sorted(o.amount for o in orders) == [300, 1000]

    def test_message_shows_naira_total(self, service, two_vendor_cart):
        result = service.checkout("buyer1")
        assert result.message == "Checkout successful: ₦13.00"

    def test_cart_is_cleared(self, service, two_vendor_cart):
        service.checkout("buyer1")
        assert find_cart("buyer1").is_empty

    def test_inactive_lines_are_skipped(self, service, buyer, vendor_a, make_product):
        make_product("pa", vendor_id="vendor-a", price=500)
        make_product("pending", vendor_id="vendor-a", price=100, status="pending")
        service.add_to_cart("buyer1", "pa")
        service.add_to_cart("buyer1", "pending")
        service.add_to_cart("buyer1", "ghost")

        result = service.checkout("buyer1")

        assert result.ok is True
        assert result.data["total"] == 500
        assert len(_all_orders()) == 1

    def test_order_amount_survives_price_edit(self, service, two_vendor_cart):
        service.checkout("buyer1")

        update = service.update_product("vendor-a", "pa", price=900)

        assert update.ok is True
        order = next(o for o in _all_orders() if str(o.product_id) == "pa")
        assert order.amount == 1000


class TestRejectedCheckout:
    def test_empty_cart(self, service, buyer):
        result = service.checkout("buyer1")

        assert result.ok is False
        assert result.reason == "EmptyCart"
        assert _balance("buyer1") == 2000
        assert _all_orders() == []

    def test_insufficient_funds_leaves_everything_untouched(self, service, make_account, vendor_a, make_product):
        make_account("poor", wallet=1000)
        make_product("pa", vendor_id="vendor-a", price=500)
        service.add_to_cart("poor", "pa", 3)

        result = service.checkout("poor")

        assert result.ok is False
        assert result.reason == "InsufficientFunds"
        assert _balance("poor") == 1000
        assert _balance("vendor-a") == 0
        assert _all_orders() == []
        assert find_cart("poor").lines() == [("pa", 3)]

    def test_no_valid_items(self, service, buyer, vendor_a, make_product):
        make_product("pa", vendor_id="vendor-a", price=500, status="suspended")
        service.add_to_cart("buyer1", "pa")

        result = service.checkout("buyer1")

        assert result.reason == "NoValidItems"
        assert _balance("buyer1") == 2000

    def test_price_changed_since_review(self, service, two_vendor_cart):
        service.update_product("vendor-a", "pa", price=600)

        result = service.checkout("buyer1", expected_total=1300)

        assert result.ok is False
        assert result.reason == "PriceChanged"
        assert _balance("buyer1") == 2000
        assert _all_orders() == []

    def test_vendors_cannot_check_out(self, service, vendor_a):
        result = service.checkout("vendor-a")
        assert result.reason == "PermissionDenied"

    def test_unknown_buyer(self, service, campus):
        result = service.checkout("nobody")
        assert result.reason == "PermissionDenied"
        assert result.message == "Customer login required."
