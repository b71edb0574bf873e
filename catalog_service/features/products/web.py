"""Server-rendered product pages (Jinja2).

Same use case as the REST API, rendered as HTML. Success and error messages
survive the post/redirect/get round trip as ``success``/``error`` query
parameters.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, Any
from urllib.parse import urlencode

from fastapi import APIRouter, Query, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from pydantic import ValidationError

from catalog_service.app.exception_handlers import collect_field_errors
from catalog_service.core.exceptions import AppException
from catalog_service.core.pagination import PaginatedResult, PaginationQuery
from catalog_service.core.settings import get_app_settings
from catalog_service.features.products.dependencies import ProductUseCaseDep
from catalog_service.features.products.domain import ProductCategory
from catalog_service.features.products.filters import ProductFilter
from catalog_service.features.products.mapper import to_domain, to_response
from catalog_service.features.products.router import resolve_limit
from catalog_service.features.products.schemas import ProductRequest

router = APIRouter(tags=["web"])

logger = logging.getLogger(__name__)

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))

WEB_PAGE_SIZE = 10


def _products_url(**params: Any) -> str:
    base = f"{get_app_settings().web_prefix.rstrip('/')}/products"
    query = {key: value for key, value in params.items() if value not in (None, "")}
    return f"{base}?{urlencode(query)}" if query else base


def _redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url=url, status_code=status.HTTP_303_SEE_OTHER)


def _form_context(
    request: Request,
    *,
    form: dict[str, Any],
    product_id: int | None = None,
    errors: dict[str, str] | None = None,
    error_message: str | None = None,
) -> dict[str, Any]:
    return {
        "request": request,
        "form": form,
        "product_id": product_id,
        "errors": errors or {},
        "error_message": error_message,
        "categories": list(ProductCategory),
        "web_prefix": get_app_settings().web_prefix.rstrip("/"),
    }


def _form_values(form: Any) -> dict[str, Any]:
    """Turn submitted form fields into ``ProductRequest`` input.

    An unchecked ``active`` checkbox is simply absent from the submission.
    """
    return {
        "name": form.get("name"),
        "price": form.get("price"),
        "category": form.get("category"),
        "active": form.get("active") in ("on", "true", "1"),
    }


@router.get("/", include_in_schema=False)
async def home() -> RedirectResponse:
    return _redirect(_products_url())


@router.get("/products", response_class=HTMLResponse)
async def list_products(
    request: Request,
    use_case: ProductUseCaseDep,
    cursor: str | None = None,
    limit: str | None = None,
    sort_by: Annotated[str | None, Query(alias="sortBy")] = None,
    sort_dir: Annotated[str | None, Query(alias="sortDir")] = None,
    category: str | None = None,
    name: str | None = None,
    active: bool | None = None,
    success: str | None = None,
    error: str | None = None,
) -> HTMLResponse:
    page_size = resolve_limit(limit, default=WEB_PAGE_SIZE)
    product_filter = ProductFilter(category=category, name=name, active=active)
    status_code = status.HTTP_200_OK
    try:
        query = PaginationQuery(cursor=cursor, limit=page_size, sort_by=sort_by, sort_dir=sort_dir)
        page = await use_case.get_all_active_products(query, product_filter)
    except AppException as e:
        logger.warning(
            "Web listing failed",
            extra={"detail": e.detail, "status_code": e.status_code},
        )
        query = PaginationQuery(limit=page_size, sort_by=sort_by)
        page = PaginatedResult(limit=page_size)
        error = f"Error loading products: {e.detail}"
        status_code = e.status_code

    filters = {
        "category": product_filter.category_for_query(),
        "name": product_filter.name_for_query(),
        "active": None if active is None else str(active).lower(),
        "limit": page_size,
        "sortBy": query.sort_by,
        "sortDir": query.sort_dir,
    }
    next_url = _products_url(cursor=page.next_cursor, **filters) if page.has_next else None
    first_url = _products_url(**filters) if page.has_previous else None

    return templates.TemplateResponse(
        request,
        "products/list.html",
        {
            "page": page.map(to_response),
            "filter": product_filter,
            "filters": filters,
            "sort_dir": query.sort_dir,
            "reverse_sort_dir": "desc" if query.sort_dir == "asc" else "asc",
            "categories": list(ProductCategory),
            "next_url": next_url,
            "first_url": first_url,
            "success_message": success,
            "error_message": error,
            "web_prefix": get_app_settings().web_prefix.rstrip("/"),
        },
        status_code=status_code,
    )


@router.get("/products/new", response_class=HTMLResponse)
async def show_create_form(request: Request) -> HTMLResponse:
    context = _form_context(
        request, form={"name": "", "price": "", "category": "", "active": True},
    )
    return templates.TemplateResponse(request, "products/form.html", context)


@router.post("/products", response_model=None)
async def create_product(request: Request, use_case: ProductUseCaseDep) -> Any:
    values = _form_values(await request.form())
    try:
        payload = ProductRequest.model_validate(values)
    except ValidationError as e:
        context = _form_context(
            request, form=values, errors=collect_field_errors(list(e.errors())),
        )
        return templates.TemplateResponse(
            request, "products/form.html", context, status_code=status.HTTP_400_BAD_REQUEST,
        )

    try:
        await use_case.create_product(to_domain(payload))
    except AppException as e:
        context = _form_context(
            request, form=values, error_message=f"Error creating product: {e.detail}",
        )
        return templates.TemplateResponse(
            request, "products/form.html", context, status_code=e.status_code,
        )

    return _redirect(_products_url(success="Product created successfully!"))


@router.get("/products/{product_id}", response_class=HTMLResponse, response_model=None)
async def show_product(
    request: Request, product_id: int, use_case: ProductUseCaseDep,
) -> Any:
    try:
        product = await use_case.get_active_product_by_id(product_id)
    except AppException:
        return _redirect(_products_url(error="Product not found"))

    return templates.TemplateResponse(
        request,
        "products/detail.html",
        {"product": to_response(product), "web_prefix": get_app_settings().web_prefix.rstrip("/")},
    )


@router.get("/products/{product_id}/edit", response_class=HTMLResponse, response_model=None)
async def show_edit_form(
    request: Request, product_id: int, use_case: ProductUseCaseDep,
) -> Any:
    try:
        product = await use_case.get_active_product_by_id(product_id)
    except AppException:
        return _redirect(_products_url(error="Product not found"))

    form = {
        "name": product.name,
        "price": str(product.price),
        "category": product.category.value,
        "active": product.active,
    }
    context = _form_context(request, form=form, product_id=product_id)
    return templates.TemplateResponse(request, "products/form.html", context)


@router.post("/products/{product_id}", response_model=None)
async def update_product(
    request: Request, product_id: int, use_case: ProductUseCaseDep,
) -> Any:
    values = _form_values(await request.form())
    try:
        payload = ProductRequest.model_validate(values)
    except ValidationError as e:
        context = _form_context(
            request,
            form=values,
            product_id=product_id,
            errors=collect_field_errors(list(e.errors())),
        )
        return templates.TemplateResponse(
            request, "products/form.html", context, status_code=status.HTTP_400_BAD_REQUEST,
        )

    try:
        await use_case.update_product(product_id, to_domain(payload))
    except AppException as e:
        context = _form_context(
            request,
            form=values,
            product_id=product_id,
            error_message=f"Error updating product: {e.detail}",
        )
        return templates.TemplateResponse(
            request, "products/form.html", context, status_code=e.status_code,
        )

    return _redirect(_products_url(success="Product updated successfully!"))


@router.post("/products/{product_id}/delete")
async def delete_product(product_id: int, use_case: ProductUseCaseDep) -> RedirectResponse:
    try:
        await use_case.deactivate_product(product_id)
    except AppException as e:
        logger.warning(
            "Web deactivation failed",
            extra={"product_id": product_id, "detail": e.detail},
        )
        return _redirect(_products_url(error=f"Error deactivating product: {e.detail}"))

    return _redirect(_products_url(success="Product deactivated successfully!"))


__all__ = ["router", "templates"]
