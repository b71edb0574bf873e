"""Conversions between wire schemas and the product domain model."""

from __future__ import annotations

from typing import TYPE_CHECKING

from catalog_service.features.products.domain import Product
from catalog_service.features.products.schemas import (
    PageInfo,
    ProductPageResponse,
    ProductRequest,
    ProductResponse,
)

if TYPE_CHECKING:
    from catalog_service.core.pagination import PaginatedResult


def to_domain(request: ProductRequest, product_id: int | None = None) -> Product:
    """Build a domain product from a validated request.

    Validators on :class:`ProductRequest` guarantee every field is present.
    """
    assert request.name is not None
    assert request.price is not None
    assert request.category is not None
    return Product(
        id=product_id,
        name=request.name,
        price=request.price,
        category=request.category,
        active=request.active,
    )


def to_response(product: Product) -> ProductResponse:
    if product.id is None:
        msg = "Cannot render an unsaved product"
        raise ValueError(msg)
    return ProductResponse(
        id=product.id,
        name=product.name,
        price=product.price,
        category=product.category,
        active=product.active,
    )


def to_page_response(page: PaginatedResult[Product]) -> ProductPageResponse:
    """Render a store page, repeating the navigation fields under ``pageInfo``."""
    return ProductPageResponse(
        content=[to_response(product) for product in page.content],
        next_cursor=page.next_cursor,
        previous_cursor=page.previous_cursor,
        has_next=page.has_next,
        has_previous=page.has_previous,
        size=page.size,
        limit=page.limit,
        page_info=PageInfo(
            size=page.size,
            limit=page.limit,
            has_next=page.has_next,
            has_previous=page.has_previous,
            next_cursor=page.next_cursor,
            previous_cursor=page.previous_cursor,
        ),
    )


__all__ = ["to_domain", "to_page_response", "to_response"]
