"""Pydantic request/response schemas for the marketplace API.

Amounts are integer kobo. Ranges (quantities, ratings, prices) are checked by
the domain so that the API reports the same reason codes as the service.
"""

from typing import Any

from pydantic import BaseModel


# ---------------------------------------------------------------------------
# Accounts and campuses
# ---------------------------------------------------------------------------
class RegisterCampusRequest(BaseModel):
    name: str
    campus_id: str | None = None


class RegisterAccountRequest(BaseModel):
    name: str
    role: str
    account_id: str | None = None
    campus_id: str | None = None
    email: str | None = None
    shop_name: str | None = None
    bio: str | None = None
    referral_code: str | None = None
    referred_by: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Ada",
                    "role": "vendor",
                    "campus_id": "unilag",
                    "shop_name": "Campus Threads",
                    "bio": "Trendy wearables for students",
                }
            ]
        }
    }


class ChangePlanRequest(BaseModel):
    plan: str


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------
class AddProductRequest(BaseModel):
    name: str
    price: int
    campus_id: str | None = None
    description: str | None = None
    category: str | None = None
    images: list[str] = []

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Vintage Hoodie",
                    "price": 750000,
                    "description": "Cozy and stylish hoodie",
                    "category": "Fashion",
                    "images": [],
                }
            ]
        }
    }


class UpdateProductRequest(BaseModel):
    name: str | None = None
    price: int | None = None
    description: str | None = None
    category: str | None = None
    images: list[str] | None = None


class BoostRequest(BaseModel):
    days: int


# ---------------------------------------------------------------------------
# Cart and checkout
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    product_id: str
    quantity: int = 1


class SetQuantityRequest(BaseModel):
    quantity: int


class CheckoutRequest(BaseModel):
    expected_total: int | None = None


# ---------------------------------------------------------------------------
# Orders and reviews
# ---------------------------------------------------------------------------
class CancelOrderRequest(BaseModel):
    reason: str | None = None


class SubmitReviewRequest(BaseModel):
    product_id: str
    rating: int
    comment: str | None = None


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------
class OperationResponse(BaseModel):
    ok: bool
    reason: str | None = None
    message: str = ""
    data: dict[str, Any] = {}
