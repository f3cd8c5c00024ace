"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Identifier, Integer, String, Text

from marketplace.domain import marketplace


@marketplace.event(part_of="Product")
class ProductListed:
    """A vendor submitted a new listing for approval."""

    __version__ = 1

    product_id = Identifier(required=True)
    vendor_id = Identifier(required=True)
    campus_id = Identifier(required=True)
    name = String(required=True)
    price = Integer(required=True)
    category = String()
    listed_at = DateTime(required=True)


@marketplace.event(part_of="Product")
class ProductDetailsUpdated:
    __version__ = 1

    product_id = Identifier(required=True)
    name = String(required=True)
    description = Text()
    category = String()


@marketplace.event(part_of="Product")
class ProductPriceChanged:
    __version__ = 1

    product_id = Identifier(required=True)
    previous_price = Integer(required=True)
    new_price = Integer(required=True)


@marketplace.event(part_of="Product")
class ProductApproved:
    __version__ = 1

    product_id = Identifier(required=True)
    approved_at = DateTime(required=True)


@marketplace.event(part_of="Product")
class ProductSuspended:
    __version__ = 1

    product_id = Identifier(required=True)
    suspended_at = DateTime(required=True)


@marketplace.event(part_of="Product")
class ProductBoosted:
    """A vendor paid for featured placement until ``featured_until``."""

    __version__ = 1

    product_id = Identifier(required=True)
    vendor_id = Identifier(required=True)
    days = Integer(required=True)
    cost = Integer(required=True)
    featured_until = DateTime(required=True)
