"""VendorSales — running sales figures per vendor for the vendor dashboard."""

from protean.core.projector import on
from protean.exceptions import ObjectNotFoundError
from protean.fields import DateTime, Identifier, Integer
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.ledger.events import OrderCancelled, OrderFulfilled, OrderPaid, OrderPlaced
from marketplace.ledger.order import Order, OrderStatus


@marketplace.projection
class VendorSales:
    vendor_id = Identifier(identifier=True, required=True)
    total_sales = Integer(default=0)  # Kobo across orders that are not cancelled
    order_count = Integer(default=0)
    pending_count = Integer(default=0)
    paid_count = Integer(default=0)
    fulfilled_count = Integer(default=0)
    cancelled_count = Integer(default=0)
    updated_at = DateTime()


_COUNTERS = {
    OrderStatus.PENDING.value: "pending_count",
    OrderStatus.PAID.value: "paid_count",
    OrderStatus.FULFILLED.value: "fulfilled_count",
    OrderStatus.CANCELLED.value: "cancelled_count",
}


def _load_or_start(vendor_id):
    repo = current_domain.repository_for(VendorSales)
    try:
        return repo.get(vendor_id)
    except ObjectNotFoundError:
        return VendorSales(vendor_id=vendor_id)


def _move(sales, from_status, to_status):
    from_counter = _COUNTERS[from_status]
    to_counter = _COUNTERS[to_status]
    setattr(sales, from_counter, max(0, getattr(sales, from_counter) - 1))
    setattr(sales, to_counter, getattr(sales, to_counter) + 1)


@marketplace.projector(projector_for=VendorSales, aggregates=[Order])
class VendorSalesProjector:
    @on(OrderPlaced)
    def on_order_placed(self, event):
        sales = _load_or_start(event.vendor_id)

        sales.order_count = sales.order_count + 1
        counter = _COUNTERS[event.status]
        setattr(sales, counter, getattr(sales, counter) + 1)
        sales.total_sales = sales.total_sales + event.amount
        sales.updated_at = event.placed_at

        current_domain.repository_for(VendorSales).add(sales)

    @on(OrderPaid)
    def on_order_paid(self, event):
        sales = _load_or_start(event.vendor_id)

        _move(sales, OrderStatus.PENDING.value, OrderStatus.PAID.value)
        sales.updated_at = event.paid_at

        current_domain.repository_for(VendorSales).add(sales)

    @on(OrderFulfilled)
    def on_order_fulfilled(self, event):
        sales = _load_or_start(event.vendor_id)

        _move(sales, OrderStatus.PAID.value, OrderStatus.FULFILLED.value)
        sales.updated_at = event.fulfilled_at

        current_domain.repository_for(VendorSales).add(sales)

    @on(OrderCancelled)
    def on_order_cancelled(self, event):
        sales = _load_or_start(event.vendor_id)

        _move(sales, event.previous_status, OrderStatus.CANCELLED.value)
        sales.total_sales = max(0, sales.total_sales - event.amount)
        sales.updated_at = event.cancelled_at

        current_domain.repository_for(VendorSales).add(sales)


def vendor_sales(vendor_id):
    """Sales figures for a vendor; zeros when nothing has sold yet."""
    try:
        return current_domain.repository_for(VendorSales).get(vendor_id)
    except ObjectNotFoundError:
        return VendorSales(vendor_id=vendor_id)
