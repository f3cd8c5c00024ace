"""Tests for the demo data set."""

from protean import current_domain

from marketplace.account.account import Account
from marketplace.catalogue.product import Product
from marketplace.seed import seed


def test_seed_loads_demo_accounts_and_listings(service):
    assert seed() is True

    customer = current_domain.repository_for(Account).get("cust1")
    assert customer.wallet == 10000000
    vendor = current_domain.repository_for(Account).get("vend1")
    assert vendor.shop_name == "Campus Threads"
    assert vendor.rating == 4.6
    assert current_domain.repository_for(Product).get("p1").price == 750000
    assert [c["id"] for c in sorted(service.campuses(), key=lambda c: c["id"])] == ["ui", "uniben", "unilag"]


def test_featured_listing_comes_first(service):
    seed()
    assert [p["id"] for p in service.browse("unilag")] == ["p1", "p2"]


def test_seed_is_idempotent():
    seed()
    assert seed() is False


def test_demo_checkout(service):
    seed()
    service.add_to_cart("cust1", "p1")
    service.add_to_cart("cust1", "p2", 2)

    result = service.checkout("cust1")

    assert result.ok is True
    assert result.message == "Checkout successful: ₦8,500.00"
