"""Campus Marketplace FastAPI application.

Web server that processes marketplace commands synchronously via HTTP. Each
request runs inside the marketplace domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV selects the config overlay from marketplace/domain.toml:
#   - unset / "test" → in-memory stores
#   - "production"   → SQLite database
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from marketplace.domain import marketplace
from marketplace.utils.logging import add_context, clear_context

marketplace.init()

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Campus Marketplace API",
    description="Campus storefronts, carts, wallet checkout and vendor reviews",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the marketplace domain context for each request."""
    clear_context()
    add_context(method=request.method, path=request.url.path, account_id=request.headers.get("X-Account-Id"))
    with marketplace.domain_context():
        response = await call_next(request)
    return response


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from marketplace.api import (  # noqa: E402
    account_router,
    campus_router,
    cart_router,
    order_router,
    product_router,
    review_router,
    vendor_router,
)

app.include_router(campus_router)
app.include_router(account_router)
app.include_router(product_router)
app.include_router(cart_router)
app.include_router(order_router)
app.include_router(review_router)
app.include_router(vendor_router)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    custom = marketplace.config.get("custom") or {}
    return JSONResponse(
        content={
            "status": "ok",
            "domain": marketplace.name,
            "currency": custom.get("currency", "NGN"),
        }
    )
