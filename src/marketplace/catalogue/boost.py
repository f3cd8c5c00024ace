"""Paid boosts — a vendor buys featured placement for a listing.

The vendor's wallet is debited and the listing's featured window extended in
the same unit of work. Affordability is checked before either changes.
"""

from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from marketplace.account.account import Account
from marketplace.catalogue.product import Product
from marketplace.catalogue.queries import load_owned_product
from marketplace.domain import logger, marketplace
from marketplace.shared.access import load_account
from marketplace.shared.errors import InsufficientFunds

DEFAULT_BOOST_DAILY_RATE = 50000


def boost_daily_rate():
    """Kobo charged per boosted day, from ``[custom] boost_daily_rate``."""
    custom = current_domain.config.get("custom") or {}
    return int(custom.get("boost_daily_rate", DEFAULT_BOOST_DAILY_RATE))


@marketplace.command(part_of="Product")
class BoostProduct:
    vendor_id = Identifier(required=True)
    product_id = Identifier(required=True)
    days = Integer(required=True, min_value=1)


@marketplace.command_handler(part_of=Product)
class BoostProductHandler:
    @handle(BoostProduct)
    def boost_product(self, command):
        product = load_owned_product(command.vendor_id, command.product_id)
        vendor = load_account(command.vendor_id)

        cost = command.days * boost_daily_rate()
        if not vendor.can_afford(cost):
            raise InsufficientFunds("Insufficient wallet.")

        product.boost(days=command.days, cost=cost)
        vendor.debit(cost, memo=f"Boost for {command.days} day(s)")

        current_domain.repository_for(Product).add(product)
        current_domain.repository_for(Account).add(vendor)

        logger.info(
            "Product boosted",
            product_id=str(product.id),
            vendor_id=str(vendor.id),
            days=command.days,
            cost=cost,
        )
        return {"cost": cost, "featured_until": product.featured_until.isoformat()}
