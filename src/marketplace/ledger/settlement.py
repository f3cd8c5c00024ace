"""OrderSettlement — the checkout ledger.

Turns a buyer's cart into paid orders and moves money between wallets. It
spans four aggregates (the buyer's Account, the ShoppingCart, the Products
being bought and the vendors' Accounts), so it lives in a domain service
rather than on any one of them.

Every precondition is evaluated before the first mutation. If any fails the
aggregates are left exactly as they were loaded, and the caller's unit of
work persists nothing.
"""

from marketplace.account.account import Account
from marketplace.cart.cart import ShoppingCart
from marketplace.domain import marketplace
from marketplace.ledger.order import Order
from marketplace.shared.errors import EmptyCart, InsufficientFunds, NoValidItems, PriceChanged


@marketplace.domain_service(part_of=[Account, ShoppingCart, Order])
class OrderSettlement:
    def __init__(self, buyer, cart, products, vendors):
        """
        Args:
            buyer: the purchasing customer's Account.
            cart: the buyer's ShoppingCart.
            products: mapping of product id to Product, or None when unresolved.
            vendors: mapping of vendor id to the vendor's Account.
        """
        super().__init__(buyer, cart)

        self.buyer = buyer
        self.cart = cart
        self.products = products
        self.vendors = vendors

    def _purchasable(self, product):
        return product is not None and product.is_active and str(product.vendor_id) in self.vendors

    def quote(self):
        """Price the cart at current catalogue prices.

        Returns ``(lines, total)`` where each line is ``(product, quantity, amount)``.
        Lines whose product is missing, not active or has no vendor account are
        left out.
        """
        lines = []
        for product_id, quantity in self.cart.lines():
            product = self.products.get(product_id)
            if not self._purchasable(product):
                continue
            lines.append((product, quantity, product.price * quantity))

        return lines, sum(amount for _, _, amount in lines)

    def settle(self, checkout_id=None, expected_total=None):
        """Debit the buyer, credit each vendor, create paid orders and clear the cart.

        Returns a dict with ``total``, ``orders`` and ``credits`` (vendor id → amount).
        """
        if self.cart is None or self.cart.is_empty:
            raise EmptyCart()

        lines, total = self.quote()
        if not lines:
            raise NoValidItems()

        if expected_total is not None and expected_total != total:
            raise PriceChanged(f"Cart total is now {total}, expected {expected_total}.")

        if not self.buyer.can_afford(total):
            raise InsufficientFunds()

        credits = {}
        for product, _, amount in lines:
            vendor_id = str(product.vendor_id)
            credits[vendor_id] = credits.get(vendor_id, 0) + amount

        # Nothing below can fail a precondition
        self.buyer.debit(total, memo=f"Checkout {checkout_id}" if checkout_id else "Checkout")
        for vendor_id, amount in credits.items():
            self.vendors[vendor_id].credit(amount, memo=f"Sales from checkout {checkout_id}" if checkout_id else "Sales")

        orders = [
            Order.place(product, buyer_id=str(self.buyer.id), quantity=quantity, checkout_id=checkout_id)
            for product, quantity, _ in lines
        ]

        self.cart.clear(reason="checkout")

        return {"total": total, "orders": orders, "credits": credits}
