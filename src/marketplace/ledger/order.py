"""Order aggregate (CQRS) — one immutable purchase record per cart line.

The amount is snapshotted at checkout (unit price × quantity) and never
recalculated, whatever happens to the product's price afterwards.

State Machine:
    PENDING → PAID | CANCELLED
    PAID → FULFILLED | CANCELLED
    FULFILLED → (terminal)
    CANCELLED → (terminal)
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, Integer, String

from marketplace.domain import marketplace
from marketplace.ledger.events import OrderCancelled, OrderFulfilled, OrderPaid, OrderPlaced
from marketplace.shared.errors import InvalidTransition


class OrderStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    FULFILLED = "fulfilled"
    CANCELLED = "cancelled"


_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.PAID, OrderStatus.CANCELLED},
    OrderStatus.PAID: {OrderStatus.FULFILLED, OrderStatus.CANCELLED},
    OrderStatus.FULFILLED: set(),
    OrderStatus.CANCELLED: set(),
}


@marketplace.aggregate
class Order:
    checkout_id = Identifier()
    product_id = Identifier(required=True)
    vendor_id = Identifier(required=True)
    buyer_id = Identifier(required=True)
    campus_id = Identifier()
    quantity = Integer(required=True, min_value=1)
    unit_price = Integer(required=True, min_value=1)
    amount = Integer(required=True, min_value=1)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    cancellation_reason = String(max_length=500)
    created_at = DateTime()
    paid_at = DateTime()
    fulfilled_at = DateTime()
    cancelled_at = DateTime()

    @invariant.post
    def amount_is_unit_price_times_quantity(self):
        if None in (self.amount, self.unit_price, self.quantity):
            return
        if self.amount != self.unit_price * self.quantity:
            raise ValidationError({"amount": ["Order amount must equal unit price times quantity"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, product, buyer_id, quantity, checkout_id=None, paid=True):
        """Record a purchase of ``quantity`` units at the product's current price."""
        now = datetime.now(UTC)
        status = OrderStatus.PAID if paid else OrderStatus.PENDING
        amount = product.price * quantity

        order = cls(
            checkout_id=checkout_id,
            product_id=str(product.id),
            vendor_id=str(product.vendor_id),
            buyer_id=buyer_id,
            campus_id=str(product.campus_id) if product.campus_id else None,
            quantity=quantity,
            unit_price=product.price,
            amount=amount,
            status=status.value,
            created_at=now,
            paid_at=now if paid else None,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                checkout_id=str(checkout_id) if checkout_id else None,
                product_id=str(product.id),
                vendor_id=str(product.vendor_id),
                buyer_id=str(buyer_id),
                campus_id=order.campus_id,
                quantity=quantity,
                unit_price=product.price,
                amount=amount,
                status=status.value,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # State transitions
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target_status):
        current = OrderStatus(self.status)
        if target_status not in _VALID_TRANSITIONS[current]:
            raise InvalidTransition(f"Cannot move a {current.value} order to {target_status.value}.")

    def is_handled_by(self, account_id):
        return str(self.vendor_id) == str(account_id)

    def mark_paid(self):
        self._assert_can_transition(OrderStatus.PAID)

        now = datetime.now(UTC)
        self.status = OrderStatus.PAID.value
        self.paid_at = now

        self.raise_(
            OrderPaid(
                order_id=str(self.id),
                vendor_id=str(self.vendor_id),
                amount=self.amount,
                paid_at=now,
            )
        )

    def fulfill(self):
        self._assert_can_transition(OrderStatus.FULFILLED)

        now = datetime.now(UTC)
        self.status = OrderStatus.FULFILLED.value
        self.fulfilled_at = now

        self.raise_(
            OrderFulfilled(
                order_id=str(self.id),
                vendor_id=str(self.vendor_id),
                fulfilled_at=now,
            )
        )

    def refund_due(self):
        """What cancelling now would return to the buyer: the amount, once paid."""
        return self.amount if self.status == OrderStatus.PAID.value else 0

    def cancel(self, reason=None):
        """Cancel the order. Returns the amount the buyer is owed back."""
        self._assert_can_transition(OrderStatus.CANCELLED)

        previous_status = self.status
        refund = self.refund_due()

        now = datetime.now(UTC)
        self.status = OrderStatus.CANCELLED.value
        self.cancellation_reason = reason
        self.cancelled_at = now

        self.raise_(
            OrderCancelled(
                order_id=str(self.id),
                vendor_id=str(self.vendor_id),
                previous_status=previous_status,
                amount=self.amount,
                refunded_amount=refund,
                reason=reason,
                cancelled_at=now,
            )
        )
        return refund
