"""Checkout — command and handler.

Loads everything the settlement needs, lets OrderSettlement decide, then
persists the buyer, the credited vendors, the new orders and the emptied
cart in the handler's single unit of work.
"""

from uuid import uuid4

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from marketplace.account.account import Account
from marketplace.cart.cart import ShoppingCart
from marketplace.cart.items import find_cart
from marketplace.catalogue.queries import find_product
from marketplace.domain import logger, marketplace
from marketplace.ledger.order import Order
from marketplace.ledger.settlement import OrderSettlement
from marketplace.shared.access import require_role
from marketplace.shared.errors import EmptyCart


@marketplace.command(part_of="Order")
class Checkout:
    buyer_id = Identifier(required=True)
    expected_total = Integer(min_value=0)  # Total the buyer last saw, if the client sends one


def _vendor_accounts(products):
    repo = current_domain.repository_for(Account)
    vendor_ids = {str(p.vendor_id) for p in products.values() if p is not None}

    vendors = {}
    for vendor_id in vendor_ids:
        try:
            account = repo.get(vendor_id)
        except ObjectNotFoundError:
            logger.warning("Vendor account missing for listed product", vendor_id=vendor_id)
            continue
        if account.is_vendor:
            vendors[vendor_id] = account
    return vendors


@marketplace.command_handler(part_of=Order)
class CheckoutHandler:
    @handle(Checkout)
    def checkout(self, command):
        buyer = require_role(command.buyer_id, "customer")

        cart = find_cart(command.buyer_id)
        if cart is None or cart.is_empty:
            raise EmptyCart()

        products = {product_id: find_product(product_id) for product_id, _ in cart.lines()}
        vendors = _vendor_accounts(products)

        checkout_id = str(uuid4())
        result = OrderSettlement(buyer, cart, products, vendors).settle(
            checkout_id=checkout_id,
            expected_total=command.expected_total,
        )

        accounts = current_domain.repository_for(Account)
        accounts.add(buyer)
        for vendor_id in result["credits"]:
            accounts.add(vendors[vendor_id])

        orders = current_domain.repository_for(Order)
        for order in result["orders"]:
            orders.add(order)

        current_domain.repository_for(ShoppingCart).add(cart)

        logger.info(
            "Checkout completed",
            buyer_id=str(buyer.id),
            checkout_id=checkout_id,
            total=result["total"],
            order_count=len(result["orders"]),
            skipped_lines=len(products) - len(result["orders"]),
        )
        return {
            "checkout_id": checkout_id,
            "total": result["total"],
            "order_ids": [str(order.id) for order in result["orders"]],
            "balance": buyer.wallet,
        }
