"""Domain events for the Review aggregate."""

from protean.fields import Boolean, DateTime, Identifier, Integer, Text

from marketplace.domain import marketplace


@marketplace.event(part_of="Review")
class ReviewSubmitted:
    """A customer reviewed a product."""

    __version__ = 1

    review_id = Identifier(required=True)
    product_id = Identifier(required=True)
    vendor_id = Identifier(required=True)
    buyer_id = Identifier(required=True)
    rating = Integer(required=True)
    comment = Text()
    verified_purchase = Boolean(default=False)
    submitted_at = DateTime(required=True)
