"""Order handling after checkout — payment confirmation, fulfilment, cancellation.

Vendors act on their own orders; admins act on any. Cancelling a paid order
moves its amount back from the vendor's wallet to the buyer's.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from marketplace.account.account import Account, Role
from marketplace.domain import logger, marketplace
from marketplace.ledger.order import Order
from marketplace.shared.access import load_account, require_role
from marketplace.shared.errors import InsufficientFunds, NotFound, PermissionDenied


@marketplace.command(part_of="Order")
class MarkOrderPaid:
    admin_id = Identifier(required=True)
    order_id = Identifier(required=True)


@marketplace.command(part_of="Order")
class FulfillOrder:
    actor_id = Identifier(required=True)
    order_id = Identifier(required=True)


@marketplace.command(part_of="Order")
class CancelOrder:
    actor_id = Identifier(required=True)
    order_id = Identifier(required=True)
    reason = String(max_length=500)


def load_order(order_id):
    try:
        return current_domain.repository_for(Order).get(order_id)
    except ObjectNotFoundError:
        raise NotFound(f"Order {order_id} not found.") from None


def _load_handled_order(actor_id, order_id):
    """Resolve an order for its vendor or an admin."""
    actor = require_role(actor_id, Role.VENDOR.value, Role.ADMIN.value)
    order = load_order(order_id)
    if actor.role == Role.VENDOR.value and not order.is_handled_by(actor.id):
        raise PermissionDenied("You can only manage orders for your own listings.")
    return order


@marketplace.command_handler(part_of=Order)
class ManageOrderHandler:
    @handle(MarkOrderPaid)
    def mark_order_paid(self, command):
        require_role(command.admin_id, Role.ADMIN.value)
        order = load_order(command.order_id)
        order.mark_paid()
        current_domain.repository_for(Order).add(order)

    @handle(FulfillOrder)
    def fulfill_order(self, command):
        order = _load_handled_order(command.actor_id, command.order_id)
        order.fulfill()
        current_domain.repository_for(Order).add(order)

        logger.info("Order fulfilled", order_id=str(order.id), actor_id=str(command.actor_id))

    @handle(CancelOrder)
    def cancel_order(self, command):
        order = _load_handled_order(command.actor_id, command.order_id)

        owed = order.refund_due()
        vendor = buyer = None
        if owed:
            vendor = load_account(order.vendor_id)
            buyer = load_account(order.buyer_id)
            if not vendor.can_afford(owed):
                raise InsufficientFunds("Vendor wallet cannot cover the refund.")

        refund = order.cancel(reason=command.reason)
        current_domain.repository_for(Order).add(order)

        if refund:
            vendor.debit(refund, memo=f"Refund for order {order.id}")
            buyer.credit(refund, memo=f"Refund for order {order.id}")
            accounts = current_domain.repository_for(Account)
            accounts.add(vendor)
            accounts.add(buyer)

        logger.info(
            "Order cancelled",
            order_id=str(order.id),
            actor_id=str(command.actor_id),
            refunded=refund,
        )
        return {"refunded": refund}


def orders_for_buyer(buyer_id):
    return (
        current_domain.repository_for(Order)
        ._dao.query.filter(buyer_id=str(buyer_id))
        .order_by("-created_at")
        .all()
        .items
    )


def orders_for_vendor(vendor_id, status=None):
    filters = {"vendor_id": str(vendor_id)}
    if status:
        filters["status"] = status
    return current_domain.repository_for(Order)._dao.query.filter(**filters).order_by("-created_at").all().items
