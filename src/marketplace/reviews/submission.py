"""SubmitReview — append a review and fold its rating into the vendor's average.

The review and the vendor's Account are persisted in the same unit of work,
so the stored average always matches the reviews on record.
"""

from protean import handle
from protean.fields import Identifier, Integer, Text
from protean.utils.globals import current_domain

from marketplace.account.account import Account, Role
from marketplace.catalogue.queries import load_product
from marketplace.domain import logger, marketplace
from marketplace.ledger.order import Order, OrderStatus
from marketplace.reviews.review import Review, validate_rating
from marketplace.shared.access import load_account, require_role


@marketplace.command(part_of="Review")
class SubmitReview:
    buyer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    rating = Integer(required=True)  # Range is checked by the handler to report InvalidRating
    comment = Text()


def has_purchased(buyer_id, product_id):
    """True when the buyer holds a paid or fulfilled order for the product."""
    orders = (
        current_domain.repository_for(Order)
        ._dao.query.filter(buyer_id=str(buyer_id), product_id=str(product_id))
        .all()
        .items
    )
    return any(order.status in (OrderStatus.PAID.value, OrderStatus.FULFILLED.value) for order in orders)


@marketplace.command_handler(part_of=Review)
class SubmitReviewHandler:
    @handle(SubmitReview)
    def submit_review(self, command):
        require_role(command.buyer_id, Role.CUSTOMER.value)
        validate_rating(command.rating)

        product = load_product(command.product_id)
        vendor = load_account(product.vendor_id)

        review = Review.submit(
            product=product,
            buyer_id=command.buyer_id,
            rating=command.rating,
            comment=command.comment,
            verified_purchase=has_purchased(command.buyer_id, product.id),
        )
        vendor.record_rating(command.rating)

        current_domain.repository_for(Review).add(review)
        current_domain.repository_for(Account).add(vendor)

        logger.info(
            "Review submitted",
            review_id=str(review.id),
            product_id=str(product.id),
            vendor_id=str(vendor.id),
            rating=command.rating,
            average_rating=vendor.rating,
        )
        return str(review.id)


def reviews_for_product(product_id):
    return (
        current_domain.repository_for(Review)
        ._dao.query.filter(product_id=str(product_id))
        .order_by("-created_at")
        .all()
        .items
    )


def reviews_for_vendor(vendor_id):
    return (
        current_domain.repository_for(Review)
        ._dao.query.filter(vendor_id=str(vendor_id))
        .order_by("-created_at")
        .all()
        .items
    )
