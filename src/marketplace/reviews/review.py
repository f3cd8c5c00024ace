"""Review aggregate — append-only product reviews.

A review is written once and never edited. Every new review is a separate
record; the vendor's running average lives on the vendor's Account.
"""

from datetime import UTC, datetime

from protean.fields import Boolean, DateTime, Identifier, Integer, Text, ValueObject

from marketplace.domain import marketplace
from marketplace.reviews.events import ReviewSubmitted
from marketplace.shared.errors import InvalidRating

MIN_RATING = 1
MAX_RATING = 5


def validate_rating(rating):
    if isinstance(rating, bool) or not isinstance(rating, int) or not MIN_RATING <= rating <= MAX_RATING:
        raise InvalidRating()
    return rating


@marketplace.value_object(part_of="Review")
class Rating:
    """A star rating from 1 to 5."""

    score = Integer(required=True, min_value=MIN_RATING, max_value=MAX_RATING)


@marketplace.aggregate
class Review:
    product_id = Identifier(required=True)
    vendor_id = Identifier(required=True)
    buyer_id = Identifier(required=True)
    rating = ValueObject(Rating, required=True)
    comment = Text()
    verified_purchase = Boolean(default=False)
    created_at = DateTime()

    @classmethod
    def submit(cls, product, buyer_id, rating, comment=None, verified_purchase=False):
        validate_rating(rating)

        now = datetime.now(UTC)
        review = cls(
            product_id=str(product.id),
            vendor_id=str(product.vendor_id),
            buyer_id=buyer_id,
            rating=Rating(score=rating),
            comment=comment,
            verified_purchase=verified_purchase,
            created_at=now,
        )
        review.raise_(
            ReviewSubmitted(
                review_id=str(review.id),
                product_id=str(product.id),
                vendor_id=str(product.vendor_id),
                buyer_id=str(buyer_id),
                rating=rating,
                comment=comment,
                verified_purchase=verified_purchase,
                submitted_at=now,
            )
        )
        return review
