"""Business failures raised by the marketplace domain.

Each failure is a Protean ``ValidationError`` so command handlers, the unit of
work and callers treat it like any other rejected change. The ``reason`` code
is what the service façade and the HTTP layer report back to the caller.
"""

from protean.exceptions import ValidationError


class MarketplaceError(ValidationError):
    """Base class for recoverable, user-facing marketplace failures."""

    reason = "Invalid"
    field = "marketplace"
    default_message = "The operation could not be completed."

    def __init__(self, message=None):
        super().__init__({self.field: [message or self.default_message]})

    @property
    def message(self):
        return self.messages[self.field][0]


class InsufficientFunds(MarketplaceError):
    reason = "InsufficientFunds"
    field = "wallet"
    default_message = "Insufficient wallet balance."


class EmptyCart(MarketplaceError):
    reason = "EmptyCart"
    field = "cart"
    default_message = "Cart is empty."


class NoValidItems(MarketplaceError):
    reason = "NoValidItems"
    field = "cart"
    default_message = "None of the items in the cart are available for purchase."


class PriceChanged(MarketplaceError):
    reason = "PriceChanged"
    field = "total"
    default_message = "Prices changed since the cart was reviewed."


class InvalidRating(MarketplaceError):
    reason = "InvalidRating"
    field = "rating"
    default_message = "Rating must be between 1 and 5."


class ProductNotFound(MarketplaceError):
    reason = "ProductNotFound"
    field = "product_id"
    default_message = "Product not found."


class NotFound(MarketplaceError):
    reason = "NotFound"
    field = "id"
    default_message = "Record not found."


class PermissionDenied(MarketplaceError):
    reason = "PermissionDenied"
    field = "actor"
    default_message = "You are not allowed to perform this action."


class InvalidTransition(MarketplaceError):
    reason = "InvalidTransition"
    field = "status"
    default_message = "Status change not allowed."
