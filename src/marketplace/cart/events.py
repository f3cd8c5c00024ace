"""Domain events for the ShoppingCart aggregate."""

from protean.fields import Identifier, Integer, String

from marketplace.domain import marketplace


@marketplace.event(part_of="ShoppingCart")
class CartItemAdded:
    """A product was added to the cart, or its line grew."""

    __version__ = 1

    cart_id = Identifier(required=True)
    buyer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    line_quantity = Integer(required=True)


@marketplace.event(part_of="ShoppingCart")
class CartQuantityUpdated:
    __version__ = 1

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@marketplace.event(part_of="ShoppingCart")
class CartItemRemoved:
    __version__ = 1

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)


@marketplace.event(part_of="ShoppingCart")
class CartCleared:
    """Every line was dropped, either explicitly or by a successful checkout."""

    __version__ = 1

    cart_id = Identifier(required=True)
    buyer_id = Identifier(required=True)
    reason = String(required=True)
