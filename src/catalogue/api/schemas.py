"""Pydantic request/response schemas for the Catalogue API.

Every response is wrapped in ``ApiResponse``: ``{"success", "message", "data"}``.
"""

from datetime import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class ImageSchema(BaseModel):
    public_id: str = Field(..., max_length=255)
    url: str = Field(..., max_length=500)


class CreateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Noise Cancelling Headphones",
                    "description": "Over-ear wireless headphones with 30h battery.",
                    "price": 199.0,
                    "category": "Electronics",
                    "stock": 25,
                    "images": [{"public_id": "products/hp-01", "url": "https://cdn.example.com/hp-01.jpg"}],
                }
            ]
        }
    }

    name: str = Field(..., max_length=100)
    description: str
    price: float = Field(..., ge=0)
    category: str = Field(..., max_length=100)
    stock: int | None = Field(None, ge=0, le=9999)
    images: list[ImageSchema] | None = None


class UpdateProductRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"price": 179.0, "stock": 40}]}}

    name: str | None = Field(None, max_length=100)
    description: str | None = None
    price: float | None = Field(None, ge=0)
    category: str | None = Field(None, max_length=100)
    stock: int | None = Field(None, ge=0, le=9999)
    images: list[ImageSchema] | None = None


class SubmitReviewRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [{"product_id": "b2c3d4e5-f6a7-8901-bcde-f12345678901", "rating": 4, "comment": "Solid."}]
        }
    }

    product_id: str
    rating: float
    comment: str | None = None


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class ReviewResponse(BaseModel):
    id: str
    reviewer_id: str
    reviewer_name: str | None = None
    rating: float
    comment: str | None = None


class ProductResponse(BaseModel):
    id: str
    name: str
    description: str
    price: float
    category: str
    stock: int
    ratings: float
    num_of_reviews: int
    images: list[ImageSchema] = []
    reviews: list[ReviewResponse] = []
    created_by: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProductPage(BaseModel):
    total_products: int
    filtered_products_count: int
    results_per_page: int
    products: list[ProductResponse]


class RatingSummary(BaseModel):
    product_id: str
    ratings: float
    num_of_reviews: int


class ApiResponse(BaseModel, Generic[T]):
    success: bool = True
    message: str
    data: T | None = None
