"""Product aggregate — a vendor's listing and its lifecycle.

State Machine:
    PENDING → ACTIVE (admin approval)
    ACTIVE → SUSPENDED (admin action)
    SUSPENDED → (terminal)

Only active listings can be bought or boosted. Vendors edit details and
price; status moves only through admin approval and suspension.
"""

import json
from datetime import UTC, datetime, timedelta
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, Integer, String, Text

from marketplace.catalogue.events import (
    ProductApproved,
    ProductBoosted,
    ProductDetailsUpdated,
    ProductListed,
    ProductPriceChanged,
    ProductSuspended,
)
from marketplace.domain import marketplace
from marketplace.shared.errors import InvalidTransition


class ProductStatus(Enum):
    PENDING = "pending"
    ACTIVE = "active"
    SUSPENDED = "suspended"


_VALID_TRANSITIONS = {
    ProductStatus.PENDING: {ProductStatus.ACTIVE},
    ProductStatus.ACTIVE: {ProductStatus.SUSPENDED},
    ProductStatus.SUSPENDED: set(),
}


@marketplace.aggregate
class Product:
    vendor_id = Identifier(required=True)
    campus_id = Identifier(required=True)
    name = String(required=True, max_length=200)
    description = Text()
    category = String(max_length=100)
    images = Text()  # JSON array of image URLs
    price = Integer(required=True, min_value=1)
    status = String(choices=ProductStatus, default=ProductStatus.PENDING.value)
    featured_until = DateTime()
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def price_must_be_positive(self):
        if self.price is not None and self.price <= 0:
            raise ValidationError({"price": ["Price must be greater than zero"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, vendor_id, campus_id, name, price, description=None, category=None, images=None, product_id=None):
        """Create a listing awaiting admin approval."""
        now = datetime.now(UTC)

        fields = dict(
            vendor_id=vendor_id,
            campus_id=campus_id,
            name=name,
            description=description,
            category=category,
            images=json.dumps(list(images or [])),
            price=price,
            status=ProductStatus.PENDING.value,
            created_at=now,
            updated_at=now,
        )
        if product_id:
            fields["id"] = product_id

        product = cls(**fields)
        product.raise_(
            ProductListed(
                product_id=str(product.id),
                vendor_id=str(vendor_id),
                campus_id=str(campus_id),
                name=name,
                price=price,
                category=category,
                listed_at=now,
            )
        )
        return product

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def image_urls(self):
        return json.loads(self.images) if self.images else []

    @property
    def is_active(self):
        return self.status == ProductStatus.ACTIVE.value

    def is_featured(self, now=None):
        if self.featured_until is None:
            return False
        featured_until = self.featured_until
        if featured_until.tzinfo is None:  # SQL providers drop the offset
            featured_until = featured_until.replace(tzinfo=UTC)
        return featured_until > (now or datetime.now(UTC))

    def is_owned_by(self, account_id):
        return str(self.vendor_id) == str(account_id)

    # -------------------------------------------------------------------
    # Vendor edits
    # -------------------------------------------------------------------
    def update_details(self, name=None, description=None, category=None, images=None):
        if name is not None:
            self.name = name
        if description is not None:
            self.description = description
        if category is not None:
            self.category = category
        if images is not None:
            self.images = json.dumps(list(images))

        self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductDetailsUpdated(
                product_id=str(self.id),
                name=self.name,
                description=self.description,
                category=self.category,
            )
        )

    def change_price(self, new_price):
        """Reprice the listing. Orders already placed keep their amounts."""
        previous_price = self.price
        if new_price == previous_price:
            return

        self.price = new_price
        self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductPriceChanged(
                product_id=str(self.id),
                previous_price=previous_price,
                new_price=new_price,
            )
        )

    # -------------------------------------------------------------------
    # State transitions
    # -------------------------------------------------------------------
    def _transition_to(self, target_status):
        current = ProductStatus(self.status)
        if target_status not in _VALID_TRANSITIONS[current]:
            raise InvalidTransition(f"Cannot move a {current.value} listing to {target_status.value}.")

        self.status = target_status.value
        now = datetime.now(UTC)
        self.updated_at = now
        return now

    def approve(self):
        now = self._transition_to(ProductStatus.ACTIVE)
        self.raise_(ProductApproved(product_id=str(self.id), approved_at=now))

    def suspend(self):
        now = self._transition_to(ProductStatus.SUSPENDED)
        self.raise_(ProductSuspended(product_id=str(self.id), suspended_at=now))

    # -------------------------------------------------------------------
    # Boost
    # -------------------------------------------------------------------
    def boost(self, days, cost, now=None):
        """Extend featured placement by ``days``, starting from any time still remaining."""
        if days < 1:
            raise ValidationError({"days": ["Boost must last at least one day"]})
        if not self.is_active:
            raise InvalidTransition("Only active listings can be boosted.")

        now = now or datetime.now(UTC)
        start = self.featured_until.replace(tzinfo=UTC) if self.is_featured(now) else now
        self.featured_until = start + timedelta(days=days)
        self.updated_at = now

        self.raise_(
            ProductBoosted(
                product_id=str(self.id),
                vendor_id=str(self.vendor_id),
                days=days,
                cost=cost,
                featured_until=self.featured_until,
            )
        )
