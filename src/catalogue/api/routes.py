"""FastAPI endpoints for products and product reviews.

Writes go through Protean commands; reads load the aggregate directly and
render it into response schemas. Lookups that find nothing raise
``ObjectNotFoundError``, which the error handlers turn into a 404.
"""

import json

from fastapi import APIRouter, Depends, Query, Request
from protean.utils.globals import current_domain

from catalogue.api.auth import RequestUser, admin_user, current_user
from catalogue.api.schemas import (
    ApiResponse,
    CreateProductRequest,
    ImageSchema,
    ProductPage,
    ProductResponse,
    RatingSummary,
    ReviewResponse,
    SubmitReviewRequest,
    UpdateProductRequest,
)
from catalogue.product.creation import CreateProduct
from catalogue.product.details import UpdateProduct
from catalogue.product.listing import PRODUCTS_PER_PAGE, ProductQuery, count_products, load_product
from catalogue.product.removal import DeleteProduct
from catalogue.product.reviews import DeleteReview, SubmitReview

product_router = APIRouter(prefix="/products", tags=["products"])
review_router = APIRouter(prefix="/reviews", tags=["reviews"])


def _review_payload(review) -> ReviewResponse:
    return ReviewResponse(
        id=str(review.id),
        reviewer_id=str(review.reviewer_id),
        reviewer_name=review.reviewer_name,
        rating=review.rating,
        comment=review.comment,
    )


def _product_payload(product) -> ProductResponse:
    return ProductResponse(
        id=str(product.id),
        name=product.name,
        description=product.description,
        price=product.price,
        category=product.category,
        stock=product.stock,
        ratings=product.ratings,
        num_of_reviews=product.num_of_reviews,
        images=[ImageSchema(public_id=i.public_id, url=i.url) for i in product.images],
        reviews=[_review_payload(r) for r in product.reviews],
        created_by=str(product.created_by) if product.created_by else None,
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


def _images_json(images):
    if images is None:
        return None
    return json.dumps([image.model_dump() for image in images])


# --- Product endpoints ---


@product_router.get("", response_model=ApiResponse[ProductPage])
async def get_all_products(request: Request) -> ApiResponse[ProductPage]:
    """List products with keyword search, field filters and pagination."""
    page = ProductQuery(request.query_params).search().filter().paginate(PRODUCTS_PER_PAGE).results()
    return ApiResponse[ProductPage](
        message="All Products fetched successfully",
        data=ProductPage(
            total_products=count_products(),
            filtered_products_count=page.total,
            results_per_page=PRODUCTS_PER_PAGE,
            products=[_product_payload(p) for p in page.items],
        ),
    )


@product_router.get("/{product_id}", response_model=ApiResponse[ProductResponse])
async def get_single_product(product_id: str) -> ApiResponse[ProductResponse]:
    product = load_product(product_id)
    return ApiResponse[ProductResponse](
        message="Single Product fetched successfully",
        data=_product_payload(product),
    )


@product_router.post("", status_code=201, response_model=ApiResponse[ProductResponse])
async def create_product(
    body: CreateProductRequest,
    user: RequestUser = Depends(admin_user),
) -> ApiResponse[ProductResponse]:
    command = CreateProduct(
        name=body.name,
        description=body.description,
        price=body.price,
        category=body.category,
        stock=body.stock,
        images=_images_json(body.images),
        created_by=user.id,
    )
    product_id = current_domain.process(command, asynchronous=False)
    return ApiResponse[ProductResponse](
        message="Product created successfully",
        data=_product_payload(load_product(product_id)),
    )


@product_router.put("/{product_id}", response_model=ApiResponse[ProductResponse])
async def update_product(
    product_id: str,
    body: UpdateProductRequest,
    user: RequestUser = Depends(admin_user),
) -> ApiResponse[ProductResponse]:
    command = UpdateProduct(
        product_id=product_id,
        name=body.name,
        description=body.description,
        price=body.price,
        category=body.category,
        stock=body.stock,
        images=_images_json(body.images),
    )
    current_domain.process(command, asynchronous=False)
    return ApiResponse[ProductResponse](
        message="Product updated successfully",
        data=_product_payload(load_product(product_id)),
    )


@product_router.delete("/{product_id}", response_model=ApiResponse[ProductResponse])
async def delete_product(
    product_id: str,
    user: RequestUser = Depends(admin_user),
) -> ApiResponse[ProductResponse]:
    deleted = _product_payload(load_product(product_id))
    current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)
    return ApiResponse[ProductResponse](message="Product deleted successfully", data=deleted)


# --- Review endpoints ---


@review_router.put("", response_model=ApiResponse[RatingSummary])
async def create_product_review(
    body: SubmitReviewRequest,
    user: RequestUser = Depends(current_user),
) -> ApiResponse[RatingSummary]:
    """Create the caller's review of a product, or replace it if one exists."""
    command = SubmitReview(
        product_id=body.product_id,
        reviewer_id=user.id,
        reviewer_name=user.name,
        rating=body.rating,
        comment=body.comment,
    )
    product_id = current_domain.process(command, asynchronous=False)
    product = load_product(product_id)
    return ApiResponse[RatingSummary](
        message="Review submitted successfully",
        data=RatingSummary(product_id=str(product.id), ratings=product.ratings, num_of_reviews=product.num_of_reviews),
    )


@review_router.get("", response_model=ApiResponse[list[ReviewResponse]])
async def get_product_reviews(product_id: str = Query(..., alias="id")) -> ApiResponse[list[ReviewResponse]]:
    product = load_product(product_id)
    return ApiResponse[list[ReviewResponse]](
        message="Reviews fetched successfully",
        data=[_review_payload(r) for r in product.reviews],
    )


@review_router.delete("", response_model=ApiResponse[ProductResponse])
async def delete_product_review(
    product_id: str = Query(...),
    review_id: str = Query(..., alias="id"),
    user: RequestUser = Depends(current_user),
) -> ApiResponse[ProductResponse]:
    command = DeleteReview(product_id=product_id, review_id=review_id)
    current_domain.process(command, asynchronous=False)
    return ApiResponse[ProductResponse](
        message="Review deleted successfully",
        data=_product_payload(load_product(product_id)),
    )
