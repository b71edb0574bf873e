"""REST API router for the products feature."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status

from catalog_service.core.pagination import MAX_LIMIT, MIN_LIMIT, PaginationQuery
from catalog_service.core.schemas import ProblemDetails, ValidationProblemDetails
from catalog_service.core.settings import get_pagination_settings
from catalog_service.features.products.dependencies import ProductUseCaseDep, require_json
from catalog_service.features.products.filters import ProductFilter
from catalog_service.features.products.mapper import to_domain, to_page_response, to_response
from catalog_service.features.products.schemas import (
    ProductPageResponse,
    ProductRequest,
    ProductResponse,
)
from catalog_service.infra.logging import get_lazy_logger

router = APIRouter(prefix="/products", tags=["products"])

logger = logging.getLogger(__name__)
lazy_logger = get_lazy_logger(__name__)

_NOT_FOUND = {404: {"model": ProblemDetails, "description": "Product not found"}}
_BAD_REQUEST = {400: {"model": ValidationProblemDetails, "description": "Invalid request"}}
_UNSUPPORTED = {415: {"model": ProblemDetails, "description": "Body is not JSON"}}


def resolve_limit(raw: str | None, default: int | None = None) -> int:
    """Parse the ``limit`` query value, falling back to ``default`` when unusable.

    ``default`` is the configured page size unless given.
    """
    if default is None:
        default = get_pagination_settings().default_limit
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        lazy_logger.debug(lambda: f"Unparseable limit {raw!r}, using {default}")
        return default
    if not MIN_LIMIT <= value <= MAX_LIMIT:
        lazy_logger.debug(lambda: f"Out-of-range limit {value}, using {default}")
        return default
    return value


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_json)],
    responses={**_BAD_REQUEST, **_UNSUPPORTED},
    summary="Create product",
)
async def create_product(
    payload: ProductRequest,
    use_case: ProductUseCaseDep,
) -> ProductResponse:
    """Create a product. The new product is assigned an id by the store."""
    created = await use_case.create_product(to_domain(payload))
    return to_response(created)


@router.get(
    "",
    response_model=ProductPageResponse,
    responses=_BAD_REQUEST,
    summary="List products",
    description="Cursor-paginated listing of products, filtered by category, name and state.",
)
async def list_products(
    use_case: ProductUseCaseDep,
    cursor: Annotated[str | None, Query(description="Cursor from a previous page")] = None,
    limit: Annotated[str | None, Query(description="Page size, 1-100 (default 20)")] = None,
    sort_by: Annotated[str | None, Query(alias="sortBy")] = None,
    sort_dir: Annotated[str | None, Query(alias="sortDir")] = None,
    category: Annotated[str | None, Query(description="ELECTRONICS, CLOTHING or BOOKS")] = None,
    name: Annotated[str | None, Query(description="Case-insensitive name substring")] = None,
    active: Annotated[bool | None, Query(description="Product state (default true)")] = None,
) -> ProductPageResponse:
    query = PaginationQuery(
        cursor=cursor,
        limit=resolve_limit(limit),
        sort_by=sort_by,
        sort_dir=sort_dir,
    )
    page = await use_case.get_all_active_products(
        query, ProductFilter(category=category, name=name, active=active),
    )
    lazy_logger.debug(
        lambda: f"list_products: size={page.size} has_next={page.has_next} cursor={cursor!r}",
    )
    return to_page_response(page)


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    responses=_NOT_FOUND,
    summary="Get active product",
)
async def get_product(product_id: int, use_case: ProductUseCaseDep) -> ProductResponse:
    return to_response(await use_case.get_active_product_by_id(product_id))


@router.put(
    "/{product_id}",
    response_model=ProductResponse,
    dependencies=[Depends(require_json)],
    responses={**_NOT_FOUND, **_BAD_REQUEST, **_UNSUPPORTED},
    summary="Replace product",
)
async def update_product(
    product_id: int,
    payload: ProductRequest,
    use_case: ProductUseCaseDep,
) -> ProductResponse:
    """Fully replace a product. Any id in the body is ignored."""
    updated = await use_case.update_product(product_id, to_domain(payload))
    return to_response(updated)


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=_NOT_FOUND,
    summary="Deactivate product",
)
async def deactivate_product(product_id: int, use_case: ProductUseCaseDep) -> Response:
    """Soft-delete a product by marking it inactive. Repeating the call is harmless."""
    await use_case.deactivate_product(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = ["resolve_limit", "router"]
