"""Cart line management — commands and handler."""

from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from marketplace.cart.cart import ShoppingCart
from marketplace.domain import marketplace


@marketplace.command(part_of="ShoppingCart")
class AddToCart:
    buyer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(default=1, min_value=1)


@marketplace.command(part_of="ShoppingCart")
class SetCartQuantity:
    buyer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@marketplace.command(part_of="ShoppingCart")
class RemoveFromCart:
    buyer_id = Identifier(required=True)
    product_id = Identifier(required=True)


@marketplace.command(part_of="ShoppingCart")
class ClearCart:
    buyer_id = Identifier(required=True)


def find_cart(buyer_id):
    """The buyer's cart, or ``None`` if they never added anything."""
    repo = current_domain.repository_for(ShoppingCart)
    carts = repo._dao.query.filter(buyer_id=str(buyer_id)).all().items
    if not carts:
        return None
    return repo.get(carts[0].id)


def cart_for(buyer_id):
    return find_cart(buyer_id) or ShoppingCart.create(buyer_id=buyer_id)


@marketplace.command_handler(part_of=ShoppingCart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        cart = cart_for(command.buyer_id)
        cart.add_item(product_id=command.product_id, quantity=command.quantity or 1)
        current_domain.repository_for(ShoppingCart).add(cart)
        return str(cart.id)

    @handle(SetCartQuantity)
    def set_cart_quantity(self, command):
        cart = cart_for(command.buyer_id)
        cart.set_quantity(product_id=command.product_id, quantity=command.quantity)
        current_domain.repository_for(ShoppingCart).add(cart)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        cart = find_cart(command.buyer_id)
        if cart is not None and cart.remove_item(product_id=command.product_id):
            current_domain.repository_for(ShoppingCart).add(cart)

    @handle(ClearCart)
    def clear_cart(self, command):
        cart = find_cart(command.buyer_id)
        if cart is not None and not cart.is_empty:
            cart.clear()
            current_domain.repository_for(ShoppingCart).add(cart)
