"""Read-side helpers for the catalogue."""

from datetime import UTC, datetime

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from marketplace.catalogue.product import Product, ProductStatus
from marketplace.shared.access import require_role
from marketplace.shared.errors import PermissionDenied, ProductNotFound


def find_product(product_id):
    """Return the product or ``None``."""
    try:
        return current_domain.repository_for(Product).get(product_id)
    except ObjectNotFoundError:
        return None


def load_product(product_id):
    product = find_product(product_id)
    if product is None:
        raise ProductNotFound(f"Product {product_id} not found.")
    return product


def browse_campus(campus_id, now=None):
    """Active listings on a campus: boosted ones first, newest first within each group."""
    now = now or datetime.now(UTC)
    products = (
        current_domain.repository_for(Product)
        ._dao.query.filter(campus_id=str(campus_id), status=ProductStatus.ACTIVE.value)
        .all()
        .items
    )
    newest_first = sorted(products, key=lambda p: p.created_at, reverse=True)
    return [p for p in newest_first if p.is_featured(now)] + [p for p in newest_first if not p.is_featured(now)]


def vendor_listings(vendor_id):
    return (
        current_domain.repository_for(Product)
        ._dao.query.filter(vendor_id=str(vendor_id))
        .order_by("-created_at")
        .all()
        .items
    )


def pending_listings():
    """Listings waiting for admin approval, oldest first."""
    return (
        current_domain.repository_for(Product)
        ._dao.query.filter(status=ProductStatus.PENDING.value)
        .order_by("created_at")
        .all()
        .items
    )


def load_owned_product(vendor_id, product_id):
    """Resolve a listing on behalf of the vendor who owns it."""
    require_role(vendor_id, "vendor")
    product = load_product(product_id)
    if not product.is_owned_by(vendor_id):
        raise PermissionDenied("You can only manage your own listings.")
    return product
