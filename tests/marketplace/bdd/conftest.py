"""Shared BDD fixtures and step definitions for the checkout ledger."""

import pytest
from protean import current_domain
from pytest_bdd import given, parsers, then

from marketplace.account.account import Account, Role
from marketplace.catalogue.product import Product, ProductStatus
from marketplace.ledger.order import Order, OrderStatus

@pytest.fixture()
def buyer_id():
    return "bdd-buyer"


@pytest.fixture()
def outcome():
    """Container for the OperationResult of the When step."""
    return {"result": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('vendor "{vendor_id}" lists "{product_id}" at {price:d} kobo'))
def vendor_lists_product(make_account, make_product, vendor_id, product_id, price):
    repo = current_domain.repository_for(Account)
    if not repo._dao.query.filter(id=vendor_id).all().items:
        make_account(vendor_id, role=Role.VENDOR.value)
    make_product(product_id, vendor_id=vendor_id, price=price)


@given(parsers.cfparse("a customer with {wallet:d} kobo in their wallet"))
def customer_with_wallet(make_account, buyer_id, wallet):
    make_account(buyer_id, wallet=wallet)


@given(parsers.cfparse('the customer has {quantity:d} of "{product_id}" in the cart'))
def customer_cart_line(service, buyer_id, quantity, product_id):
    assert service.add_to_cart(buyer_id, product_id, quantity).ok


@given(parsers.cfparse('listing "{product_id}" is suspended'))
def listing_suspended(product_id):
    repo = current_domain.repository_for(Product)
    product = repo.get(product_id)
    product.status = ProductStatus.SUSPENDED.value
    repo.add(product)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the customer wallet holds {amount:d} kobo"))
def customer_wallet_holds(buyer_id, amount):
    assert current_domain.repository_for(Account).get(buyer_id).wallet == amount


@then(parsers.cfparse('vendor "{vendor_id}" wallet holds {amount:d} kobo'))
def vendor_wallet_holds(vendor_id, amount):
    assert current_domain.repository_for(Account).get(vendor_id).wallet == amount


@then(parsers.cfparse("{count:d} paid orders are recorded"))
def paid_orders_recorded(buyer_id, count):
    orders = current_domain.repository_for(Order)._dao.query.filter(buyer_id=buyer_id).all().items
    assert len(orders) == count
    assert all(order.status == OrderStatus.PAID.value for order in orders)
