"""Demo data: three campuses, an admin, a customer, two vendors and two listings.

Seeding writes straight through the repositories with fixed ids, so the demo
accounts can be used without going through sign-up. Running it again is a
no-op once the demo customer exists.
"""

from datetime import UTC, datetime, timedelta

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from marketplace.account.account import Account, Role, VendorPlan, VendorStatus
from marketplace.campus.campus import Campus
from marketplace.catalogue.product import Product, ProductStatus
from marketplace.domain import logger
from marketplace.shared.money import naira

DEMO_CAMPUS_ID = "unilag"
DEMO_CUSTOMER_ID = "cust1"

CAMPUSES = [
    ("unilag", "UNILAG"),
    ("uniben", "UNIBEN"),
    ("ui", "UI Ibadan"),
]


def _already_seeded():
    try:
        current_domain.repository_for(Account).get(DEMO_CUSTOMER_ID)
    except ObjectNotFoundError:
        return False
    return True


def _vendor(account_id, name, shop_name, bio, referral_code, wallet, plan, rating, ratings_count):
    vendor = Account.register(
        account_id=account_id,
        name=name,
        role=Role.VENDOR.value,
        campus_id=DEMO_CAMPUS_ID,
        shop_name=shop_name,
        bio=bio,
        referral_code=referral_code,
        opening_balance=naira(wallet),
    )
    vendor.vendor_status = VendorStatus.APPROVED.value
    vendor.plan = plan
    vendor.rating = rating
    vendor.ratings_count = ratings_count
    return vendor


def _active_product(product_id, vendor_id, name, price, description, category, created_at, featured_until=None):
    product = Product.create(
        product_id=product_id,
        vendor_id=vendor_id,
        campus_id=DEMO_CAMPUS_ID,
        name=name,
        price=naira(price),
        description=description,
        category=category,
    )
    product.status = ProductStatus.ACTIVE.value
    product.created_at = created_at
    product.featured_until = featured_until
    return product


def seed():
    """Load the demo data set into the active domain. Returns False if it was already there."""
    if _already_seeded():
        logger.info("Demo data already present, skipping seed")
        return False

    now = datetime.now(UTC)

    campuses = current_domain.repository_for(Campus)
    for campus_id, name in CAMPUSES:
        campuses.add(Campus(id=campus_id, name=name))

    accounts = current_domain.repository_for(Account)
    accounts.add(
        Account.register(
            account_id="admin1",
            name="Admin",
            role=Role.ADMIN.value,
            campus_id=DEMO_CAMPUS_ID,
            referral_code="ADMIN",
        )
    )
    accounts.add(
        Account.register(
            account_id=DEMO_CUSTOMER_ID,
            name="Jeffrey",
            role=Role.CUSTOMER.value,
            campus_id=DEMO_CAMPUS_ID,
            referral_code="JEFF10",
            opening_balance=naira(100000),
        )
    )
    accounts.add(
        _vendor(
            "vend1",
            name="Ada",
            shop_name="Campus Threads",
            bio="Trendy wearables for students",
            referral_code="ADA5",
            wallet=20000,
            plan=VendorPlan.PREMIUM.value,
            rating=4.6,
            ratings_count=23,
        )
    )
    accounts.add(
        _vendor(
            "vend2",
            name="Femi",
            shop_name="Tasty Bites",
            bio="Snacks & quick bites",
            referral_code="FEMI9",
            wallet=12000,
            plan=VendorPlan.FREE.value,
            rating=4.2,
            ratings_count=14,
        )
    )

    products = current_domain.repository_for(Product)
    products.add(
        _active_product(
            "p1",
            vendor_id="vend1",
            name="Vintage Hoodie",
            price=7500,
            description="Cozy and stylish hoodie",
            category="Fashion",
            created_at=now - timedelta(days=1),
            featured_until=now + timedelta(days=2),
        )
    )
    products.add(
        _active_product(
            "p2",
            vendor_id="vend2",
            name="Chicken Pie",
            price=500,
            description="Freshly baked daily",
            category="Food & Snacks",
            created_at=now - timedelta(hours=12),
        )
    )

    logger.info("Demo data seeded", campuses=len(CAMPUSES), accounts=4, products=2)
    return True
