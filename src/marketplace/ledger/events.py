"""Domain events for the Order aggregate.

The VendorSales projection and any UI listeners subscribe to these.
"""

from protean.fields import DateTime, Identifier, Integer, String

from marketplace.domain import marketplace


@marketplace.event(part_of="Order")
class OrderPlaced:
    """An order record was appended to the ledger."""

    __version__ = 1

    order_id = Identifier(required=True)
    checkout_id = Identifier()
    product_id = Identifier(required=True)
    vendor_id = Identifier(required=True)
    buyer_id = Identifier(required=True)
    campus_id = Identifier()
    quantity = Integer(required=True)
    unit_price = Integer(required=True)
    amount = Integer(required=True)
    status = String(required=True)
    placed_at = DateTime(required=True)


@marketplace.event(part_of="Order")
class OrderPaid:
    __version__ = 1

    order_id = Identifier(required=True)
    vendor_id = Identifier(required=True)
    amount = Integer(required=True)
    paid_at = DateTime(required=True)


@marketplace.event(part_of="Order")
class OrderFulfilled:
    __version__ = 1

    order_id = Identifier(required=True)
    vendor_id = Identifier(required=True)
    fulfilled_at = DateTime(required=True)


@marketplace.event(part_of="Order")
class OrderCancelled:
    __version__ = 1

    order_id = Identifier(required=True)
    vendor_id = Identifier(required=True)
    previous_status = String(required=True)
    amount = Integer(required=True)
    refunded_amount = Integer(default=0)
    reason = String()
    cancelled_at = DateTime(required=True)
