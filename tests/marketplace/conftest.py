"""Shared fixtures for marketplace tests: accounts, listings and the service."""

import pytest
from protean import current_domain

from marketplace.account.account import Account, Role, VendorStatus
from marketplace.campus.campus import Campus
from marketplace.catalogue.product import Product, ProductStatus
from marketplace.service import MarketplaceService


@pytest.fixture()
def service():
    return MarketplaceService(current_domain)


@pytest.fixture()
def campus():
    campus = Campus(id="unilag", name="UNILAG")
    current_domain.repository_for(Campus).add(campus)
    return campus


@pytest.fixture()
def make_account(campus):
    def _make(account_id, role=Role.CUSTOMER.value, wallet=0, **extra):
        if role == Role.VENDOR.value:
            extra.setdefault("shop_name", f"{account_id} shop")
        account = Account.register(
            account_id=account_id,
            name=account_id.title(),
            role=role,
            campus_id=str(campus.id),
            opening_balance=wallet,
            **extra,
        )
        if role == Role.VENDOR.value:
            account.vendor_status = VendorStatus.APPROVED.value
        current_domain.repository_for(Account).add(account)
        return account

    return _make


@pytest.fixture()
def make_product(campus):
    def _make(product_id, vendor_id, price, status=ProductStatus.ACTIVE.value, name=None):
        product = Product.create(
            product_id=product_id,
            vendor_id=vendor_id,
            campus_id=str(campus.id),
            name=name or product_id.title(),
            price=price,
        )
        product.status = status
        current_domain.repository_for(Product).add(product)
        return product

    return _make


@pytest.fixture()
def admin(make_account):
    return make_account("admin1", role=Role.ADMIN.value)


@pytest.fixture()
def buyer(make_account):
    return make_account("buyer1", wallet=2000)


@pytest.fixture()
def vendor_a(make_account):
    return make_account("vendor-a", role=Role.VENDOR.value)


@pytest.fixture()
def vendor_b(make_account):
    return make_account("vendor-b", role=Role.VENDOR.value)
