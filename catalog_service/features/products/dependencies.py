"""FastAPI dependency providers for the products feature.

The relational store always backs writes. Listings are served from the
Cosmos DB store when it is connected and change events keep it in sync
(RabbitMQ configured), otherwise from the relational store.

Usage:
    @router.get("/{product_id}")
    async def get_product(use_case: ProductUseCaseDep, product_id: int) -> ...:
        ...
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_service.core.events import EventPublisher
from catalog_service.core.exceptions import UnsupportedMediaTypeException
from catalog_service.core.settings import get_app_settings, get_rabbit_settings
from catalog_service.features.products.documents import CosmosProductStore
from catalog_service.features.products.ports import ProductStore
from catalog_service.features.products.repository import SqlProductStore
from catalog_service.features.products.service import ProductService, ProductUseCase
from catalog_service.infra.database import get_async_session
from catalog_service.infra.documents import get_document_client
from catalog_service.infra.messaging.publisher import get_event_publisher


async def get_db_session() -> AsyncGenerator[AsyncSession]:
    """FastAPI dependency for a request-scoped database session."""
    async with get_async_session() as session:
        yield session


def get_product_store(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> ProductStore:
    return SqlProductStore(session, timeout=get_app_settings().store_call_timeout)


def get_read_store() -> ProductStore | None:
    client = get_document_client()
    if client is None or not get_rabbit_settings().is_configured:
        return None
    return CosmosProductStore(client, timeout=get_app_settings().store_call_timeout)


def get_publisher() -> EventPublisher:
    return get_event_publisher()


def get_product_service(
    store: Annotated[ProductStore, Depends(get_product_store)],
    read_store: Annotated[ProductStore | None, Depends(get_read_store)],
    publisher: Annotated[EventPublisher, Depends(get_publisher)],
) -> ProductService:
    return ProductService(store, publisher, read_store=read_store)


def get_product_use_case(
    service: Annotated[ProductService, Depends(get_product_service)],
) -> ProductUseCase:
    return ProductUseCase(service)


ProductUseCaseDep = Annotated[ProductUseCase, Depends(get_product_use_case)]


async def require_json(request: Request) -> None:
    """Reject request bodies that are not ``application/json`` with 415."""
    content_type = request.headers.get("content-type", "")
    media_type = content_type.split(";", 1)[0].strip().lower()
    if media_type != "application/json" and not media_type.endswith("+json"):
        raise UnsupportedMediaTypeException(
            detail=f"Content type '{content_type or 'none'}' is not supported; use application/json",
            extra={"content_type": content_type},
        )


__all__ = [
    "ProductUseCaseDep",
    "get_db_session",
    "get_product_service",
    "get_product_store",
    "get_product_use_case",
    "get_publisher",
    "get_read_store",
    "require_json",
]
