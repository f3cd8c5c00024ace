"""MarketplaceService — the interface UI layers call.

Every command method dispatches one Protean command synchronously and returns
an ``OperationResult``. Business failures come back as ``ok=False`` with a
reason code and a human-readable message; they are never raised to the caller.
Query methods return plain dicts ready for rendering.
"""

import json
from typing import Any

from protean.exceptions import ExpectedVersionError, ObjectNotFoundError, ValidationError
from pydantic import BaseModel, Field

from marketplace.account.account import Account
from marketplace.account.registration import RegisterAccount
from marketplace.account.vendor import ApproveVendor, ChangeVendorPlan
from marketplace.campus.campus import RegisterCampus, list_campuses
from marketplace.cart.items import AddToCart, ClearCart, RemoveFromCart, SetCartQuantity, find_cart
from marketplace.catalogue.boost import BoostProduct
from marketplace.catalogue.listing import AddProduct, DeleteProduct, UpdateProduct
from marketplace.catalogue.moderation import ApproveListing, SuspendListing
from marketplace.catalogue.queries import browse_campus, find_product, pending_listings, vendor_listings
from marketplace.ledger.checkout import Checkout
from marketplace.ledger.fulfillment import (
    CancelOrder,
    FulfillOrder,
    MarkOrderPaid,
    orders_for_buyer,
    orders_for_vendor,
)
from marketplace.projections.vendor_sales import vendor_sales
from marketplace.reviews.submission import SubmitReview, reviews_for_product
from marketplace.shared.errors import MarketplaceError
from marketplace.shared.money import format_ngn
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)


class OperationResult(BaseModel):
    ok: bool
    reason: str | None = None
    message: str = ""
    data: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def success(cls, message, **data):
        return cls(ok=True, message=message, data=data)

    @classmethod
    def failure(cls, reason, message):
        return cls(ok=False, reason=reason, message=message)


def _validation_message(exc):
    messages = getattr(exc, "messages", None) or {}
    parts = []
    for field, errors in messages.items():
        errors = errors if isinstance(errors, list) else [errors]
        parts.append(f"{field}: {', '.join(str(e) for e in errors)}")
    return "; ".join(parts) or str(exc)


def _serialise_images(fields):
    """Commands carry images as a JSON array; callers may pass a plain list."""
    if isinstance(fields.get("images"), (list, tuple)):
        fields["images"] = json.dumps(list(fields["images"]))
    return fields


def _product_view(product):
    data = product.to_dict()
    data["images"] = product.image_urls
    data["featured"] = product.is_featured()
    data["price_display"] = format_ngn(product.price)
    return data


class MarketplaceService:
    def __init__(self, domain):
        self.domain = domain

    # -------------------------------------------------------------------
    # Dispatch
    # -------------------------------------------------------------------
    def _dispatch(self, operation, command_cls, fields, on_success):
        """Build and process ``command_cls``, turning failures into results.

        ``on_success`` receives the handler's return value and returns the
        successful ``OperationResult``.
        """
        try:
            returned = self.domain.process(command_cls(**fields), asynchronous=False)
        except MarketplaceError as exc:
            logger.info("Operation rejected", operation=operation, reason=exc.reason, message=exc.message)
            return OperationResult.failure(exc.reason, exc.message)
        except ExpectedVersionError as exc:
            logger.warning("Concurrent update detected", operation=operation, error=str(exc))
            return OperationResult.failure("Conflict", "The record was changed by someone else. Please retry.")
        except ValidationError as exc:
            message = _validation_message(exc)
            logger.info("Operation rejected", operation=operation, reason="ValidationFailed", message=message)
            return OperationResult.failure("ValidationFailed", message)

        return on_success(returned)

    # -------------------------------------------------------------------
    # Accounts and campuses
    # -------------------------------------------------------------------
    def register_campus(self, admin_id, name, campus_id=None):
        return self._dispatch(
            "register_campus",
            RegisterCampus,
            {"admin_id": admin_id, "name": name, "campus_id": campus_id},
            lambda new_id: OperationResult.success(f"Campus {name} registered.", campus_id=new_id),
        )

    def register_account(self, name, role, **details):
        return self._dispatch(
            "register_account",
            RegisterAccount,
            {"name": name, "role": role, **details},
            lambda account_id: OperationResult.success("Account created.", account_id=account_id),
        )

    def approve_vendor(self, admin_id, vendor_id):
        return self._dispatch(
            "approve_vendor",
            ApproveVendor,
            {"admin_id": admin_id, "vendor_id": vendor_id},
            lambda _: OperationResult.success("Vendor approved.", vendor_id=vendor_id),
        )

    def change_vendor_plan(self, admin_id, vendor_id, plan):
        return self._dispatch(
            "change_vendor_plan",
            ChangeVendorPlan,
            {"admin_id": admin_id, "vendor_id": vendor_id, "plan": plan},
            lambda _: OperationResult.success(f"Vendor plan set to {plan}.", vendor_id=vendor_id, plan=plan),
        )

    # -------------------------------------------------------------------
    # Catalogue
    # -------------------------------------------------------------------
    def add_product(self, vendor_id, name, price, **draft):
        return self._dispatch(
            "add_product",
            AddProduct,
            _serialise_images({"vendor_id": vendor_id, "name": name, "price": price, **draft}),
            lambda product_id: OperationResult.success(
                "Product submitted for approval.", product_id=product_id
            ),
        )

    def update_product(self, vendor_id, product_id, **patch):
        return self._dispatch(
            "update_product",
            UpdateProduct,
            _serialise_images({"vendor_id": vendor_id, "product_id": product_id, **patch}),
            lambda _: OperationResult.success("Product updated.", product_id=product_id),
        )

    def delete_product(self, vendor_id, product_id):
        return self._dispatch(
            "delete_product",
            DeleteProduct,
            {"vendor_id": vendor_id, "product_id": product_id},
            lambda _: OperationResult.success("Product deleted.", product_id=product_id),
        )

    def approve_listing(self, admin_id, product_id):
        return self._dispatch(
            "approve_listing",
            ApproveListing,
            {"admin_id": admin_id, "product_id": product_id},
            lambda _: OperationResult.success("Listing approved.", product_id=product_id),
        )

    def suspend_listing(self, admin_id, product_id):
        return self._dispatch(
            "suspend_listing",
            SuspendListing,
            {"admin_id": admin_id, "product_id": product_id},
            lambda _: OperationResult.success("Listing suspended.", product_id=product_id),
        )

    def boost_product(self, vendor_id, product_id, days):
        def boosted(result):
            return OperationResult.success(
                f"Product boosted for {days} day(s): {format_ngn(result['cost'])}",
                product_id=product_id,
                **result,
            )

        return self._dispatch(
            "boost_product",
            BoostProduct,
            {"vendor_id": vendor_id, "product_id": product_id, "days": days},
            boosted,
        )

    # -------------------------------------------------------------------
    # Cart
    # -------------------------------------------------------------------
    def add_to_cart(self, buyer_id, product_id, quantity=1):
        return self._dispatch(
            "add_to_cart",
            AddToCart,
            {"buyer_id": buyer_id, "product_id": product_id, "quantity": quantity},
            lambda _: OperationResult.success("Added to cart.", product_id=product_id),
        )

    def remove_from_cart(self, buyer_id, product_id):
        return self._dispatch(
            "remove_from_cart",
            RemoveFromCart,
            {"buyer_id": buyer_id, "product_id": product_id},
            lambda _: OperationResult.success("Removed from cart.", product_id=product_id),
        )

    def set_quantity(self, buyer_id, product_id, quantity):
        return self._dispatch(
            "set_quantity",
            SetCartQuantity,
            {"buyer_id": buyer_id, "product_id": product_id, "quantity": quantity},
            lambda _: OperationResult.success("Quantity updated.", product_id=product_id, quantity=quantity),
        )

    def clear_cart(self, buyer_id):
        return self._dispatch(
            "clear_cart",
            ClearCart,
            {"buyer_id": buyer_id},
            lambda _: OperationResult.success("Cart cleared."),
        )

    # -------------------------------------------------------------------
    # Order ledger
    # -------------------------------------------------------------------
    def checkout(self, buyer_id, expected_total=None):
        return self._dispatch(
            "checkout",
            Checkout,
            {"buyer_id": buyer_id, "expected_total": expected_total},
            lambda result: OperationResult.success(f"Checkout successful: {format_ngn(result['total'])}", **result),
        )

    def fulfill_order(self, actor_id, order_id):
        return self._dispatch(
            "fulfill_order",
            FulfillOrder,
            {"actor_id": actor_id, "order_id": order_id},
            lambda _: OperationResult.success("Order fulfilled.", order_id=order_id),
        )

    def cancel_order(self, actor_id, order_id, reason=None):
        def cancelled(result):
            message = "Order cancelled."
            if result["refunded"]:
                message = f"Order cancelled. {format_ngn(result['refunded'])} refunded to the buyer."
            return OperationResult.success(message, order_id=order_id, **result)

        return self._dispatch(
            "cancel_order",
            CancelOrder,
            {"actor_id": actor_id, "order_id": order_id, "reason": reason},
            cancelled,
        )

    def mark_paid(self, admin_id, order_id):
        return self._dispatch(
            "mark_paid",
            MarkOrderPaid,
            {"admin_id": admin_id, "order_id": order_id},
            lambda _: OperationResult.success("Order marked as paid.", order_id=order_id),
        )

    # -------------------------------------------------------------------
    # Reviews
    # -------------------------------------------------------------------
    def submit_review(self, buyer_id, product_id, rating, comment=None):
        return self._dispatch(
            "submit_review",
            SubmitReview,
            {"buyer_id": buyer_id, "product_id": product_id, "rating": rating, "comment": comment},
            lambda review_id: OperationResult.success("Thanks for your review!", review_id=review_id),
        )

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def get_account(self, account_id):
        try:
            account = self.domain.repository_for(Account).get(account_id)
        except ObjectNotFoundError:
            return None
        data = account.to_dict()
        data["wallet_display"] = format_ngn(account.wallet)
        return data

    def campuses(self):
        return [campus.to_dict() for campus in list_campuses()]

    def get_product(self, product_id):
        product = find_product(product_id)
        return _product_view(product) if product else None

    def browse(self, campus_id):
        return [_product_view(p) for p in browse_campus(campus_id)]

    def vendor_products(self, vendor_id):
        return [_product_view(p) for p in vendor_listings(vendor_id)]

    def pending_products(self):
        return [_product_view(p) for p in pending_listings()]

    def cart(self, buyer_id):
        """The buyer's cart priced at current catalogue prices."""
        cart = find_cart(buyer_id)
        lines = []
        for product_id, quantity in cart.lines() if cart else []:
            product = find_product(product_id)
            unit_price = product.price if product else None
            lines.append(
                {
                    "product_id": product_id,
                    "name": product.name if product else None,
                    "quantity": quantity,
                    "unit_price": unit_price,
                    "amount": unit_price * quantity if product else None,
                    "available": bool(product and product.is_active),
                }
            )

        total = sum(line["amount"] for line in lines if line["available"])
        return {"buyer_id": str(buyer_id), "lines": lines, "total": total, "total_display": format_ngn(total)}

    def buyer_orders(self, buyer_id):
        return [order.to_dict() for order in orders_for_buyer(buyer_id)]

    def vendor_orders(self, vendor_id, status=None):
        return [order.to_dict() for order in orders_for_vendor(vendor_id, status=status)]

    def product_reviews(self, product_id):
        return [review.to_dict() for review in reviews_for_product(product_id)]

    def vendor_sales(self, vendor_id):
        sales = vendor_sales(vendor_id)
        data = sales.to_dict()
        data["total_sales_display"] = format_ngn(sales.total_sales or 0)
        return data
