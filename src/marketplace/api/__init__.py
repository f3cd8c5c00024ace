"""Marketplace API package."""

from marketplace.api.routes import (
    account_router,
    campus_router,
    cart_router,
    order_router,
    product_router,
    review_router,
    vendor_router,
)

__all__ = [
    "account_router",
    "campus_router",
    "cart_router",
    "order_router",
    "product_router",
    "review_router",
    "vendor_router",
]
