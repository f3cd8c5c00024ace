"""FastAPI routes over MarketplaceService.

Commands answer with the ``OperationResult`` JSON. The HTTP status is derived
from the result's reason code. The acting account is sent in the
``X-Account-Id`` header, standing in for the id a login session would carry.
"""

from typing import Annotated

from fastapi import APIRouter, Header, HTTPException
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from protean.utils.globals import current_domain

from marketplace.api.schemas import (
    AddProductRequest,
    AddToCartRequest,
    BoostRequest,
    CancelOrderRequest,
    ChangePlanRequest,
    CheckoutRequest,
    OperationResponse,
    RegisterAccountRequest,
    RegisterCampusRequest,
    SetQuantityRequest,
    SubmitReviewRequest,
    UpdateProductRequest,
)
from marketplace.service import MarketplaceService

_STATUS_BY_REASON = {
    "ValidationFailed": 400,
    "EmptyCart": 400,
    "NoValidItems": 400,
    "InvalidRating": 400,
    "InsufficientFunds": 402,
    "PermissionDenied": 403,
    "NotFound": 404,
    "ProductNotFound": 404,
    "Conflict": 409,
    "PriceChanged": 409,
    "InvalidTransition": 409,
}


def _service():
    return MarketplaceService(current_domain)


def _respond(result, created=False):
    if result.ok:
        status_code = 201 if created else 200
    else:
        status_code = _STATUS_BY_REASON.get(result.reason, 400)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(result))


def _found(data, what):
    if data is None:
        raise HTTPException(status_code=404, detail=f"{what} not found")
    return data


ActingAccount = Annotated[str, Header(alias="X-Account-Id")]

campus_router = APIRouter(prefix="/campuses", tags=["campuses"])
account_router = APIRouter(prefix="/accounts", tags=["accounts"])
product_router = APIRouter(prefix="/products", tags=["products"])
cart_router = APIRouter(prefix="/carts", tags=["carts"])
order_router = APIRouter(prefix="/orders", tags=["orders"])
review_router = APIRouter(prefix="/reviews", tags=["reviews"])
vendor_router = APIRouter(prefix="/vendors", tags=["vendors"])


# --- Campuses ---


@campus_router.get("")
async def list_campuses():
    return _service().campuses()


@campus_router.post("", status_code=201, response_model=OperationResponse)
async def register_campus(body: RegisterCampusRequest, actor_id: ActingAccount):
    return _respond(_service().register_campus(actor_id, body.name, campus_id=body.campus_id), created=True)


# --- Accounts ---


@account_router.post("", status_code=201, response_model=OperationResponse)
async def register_account(body: RegisterAccountRequest):
    details = body.model_dump(exclude={"name", "role"}, exclude_none=True)
    return _respond(_service().register_account(body.name, body.role, **details), created=True)


@account_router.get("/{account_id}")
async def get_account(account_id: str):
    return _found(_service().get_account(account_id), "Account")


@account_router.post("/{account_id}/approve", response_model=OperationResponse)
async def approve_vendor(account_id: str, actor_id: ActingAccount):
    return _respond(_service().approve_vendor(actor_id, account_id))


@account_router.put("/{account_id}/plan", response_model=OperationResponse)
async def change_vendor_plan(account_id: str, body: ChangePlanRequest, actor_id: ActingAccount):
    return _respond(_service().change_vendor_plan(actor_id, account_id, body.plan))


# --- Products ---


@product_router.get("")
async def browse_products(campus_id: str):
    return _service().browse(campus_id)


@product_router.get("/pending")
async def pending_products():
    return _service().pending_products()


@product_router.get("/{product_id}")
async def get_product(product_id: str):
    return _found(_service().get_product(product_id), "Product")


@product_router.get("/{product_id}/reviews")
async def product_reviews(product_id: str):
    return _service().product_reviews(product_id)


@product_router.post("", status_code=201, response_model=OperationResponse)
async def add_product(body: AddProductRequest, actor_id: ActingAccount):
    result = _service().add_product(
        actor_id,
        name=body.name,
        price=body.price,
        campus_id=body.campus_id,
        description=body.description,
        category=body.category,
        images=body.images,
    )
    return _respond(result, created=True)


@product_router.patch("/{product_id}", response_model=OperationResponse)
async def update_product(product_id: str, body: UpdateProductRequest, actor_id: ActingAccount):
    patch = body.model_dump(exclude_none=True)
    return _respond(_service().update_product(actor_id, product_id, **patch))


@product_router.delete("/{product_id}", response_model=OperationResponse)
async def delete_product(product_id: str, actor_id: ActingAccount):
    return _respond(_service().delete_product(actor_id, product_id))


@product_router.post("/{product_id}/approve", response_model=OperationResponse)
async def approve_listing(product_id: str, actor_id: ActingAccount):
    return _respond(_service().approve_listing(actor_id, product_id))


@product_router.post("/{product_id}/suspend", response_model=OperationResponse)
async def suspend_listing(product_id: str, actor_id: ActingAccount):
    return _respond(_service().suspend_listing(actor_id, product_id))


@product_router.post("/{product_id}/boost", response_model=OperationResponse)
async def boost_product(product_id: str, body: BoostRequest, actor_id: ActingAccount):
    return _respond(_service().boost_product(actor_id, product_id, body.days))


# --- Carts ---


@cart_router.get("/{buyer_id}")
async def get_cart(buyer_id: str):
    return _service().cart(buyer_id)


@cart_router.post("/{buyer_id}/items", response_model=OperationResponse)
async def add_cart_item(buyer_id: str, body: AddToCartRequest):
    return _respond(_service().add_to_cart(buyer_id, body.product_id, body.quantity))


@cart_router.put("/{buyer_id}/items/{product_id}", response_model=OperationResponse)
async def set_cart_quantity(buyer_id: str, product_id: str, body: SetQuantityRequest):
    return _respond(_service().set_quantity(buyer_id, product_id, body.quantity))


@cart_router.delete("/{buyer_id}/items/{product_id}", response_model=OperationResponse)
async def remove_cart_item(buyer_id: str, product_id: str):
    return _respond(_service().remove_from_cart(buyer_id, product_id))


@cart_router.delete("/{buyer_id}", response_model=OperationResponse)
async def clear_cart(buyer_id: str):
    return _respond(_service().clear_cart(buyer_id))


@cart_router.post("/{buyer_id}/checkout", status_code=201, response_model=OperationResponse)
async def checkout(buyer_id: str, body: CheckoutRequest | None = None):
    expected_total = body.expected_total if body else None
    return _respond(_service().checkout(buyer_id, expected_total=expected_total), created=True)


# --- Orders ---


@order_router.get("")
async def list_orders(buyer_id: str | None = None, vendor_id: str | None = None, status: str | None = None):
    if vendor_id:
        return _service().vendor_orders(vendor_id, status=status)
    if buyer_id:
        return _service().buyer_orders(buyer_id)
    raise HTTPException(status_code=400, detail="buyer_id or vendor_id is required")


@order_router.post("/{order_id}/pay", response_model=OperationResponse)
async def mark_paid(order_id: str, actor_id: ActingAccount):
    return _respond(_service().mark_paid(actor_id, order_id))


@order_router.post("/{order_id}/fulfill", response_model=OperationResponse)
async def fulfill_order(order_id: str, actor_id: ActingAccount):
    return _respond(_service().fulfill_order(actor_id, order_id))


@order_router.post("/{order_id}/cancel", response_model=OperationResponse)
async def cancel_order(order_id: str, body: CancelOrderRequest, actor_id: ActingAccount):
    return _respond(_service().cancel_order(actor_id, order_id, reason=body.reason))


# --- Reviews ---


@review_router.post("", status_code=201, response_model=OperationResponse)
async def submit_review(body: SubmitReviewRequest, actor_id: ActingAccount):
    result = _service().submit_review(actor_id, body.product_id, body.rating, comment=body.comment)
    return _respond(result, created=True)


# --- Vendors ---


@vendor_router.get("/{vendor_id}/sales")
async def vendor_sales(vendor_id: str):
    return _service().vendor_sales(vendor_id)


@vendor_router.get("/{vendor_id}/products")
async def vendor_products(vendor_id: str):
    return _service().vendor_products(vendor_id)
