"""Pytest configuration and shared fixtures.

Organization:
    - Application Fixtures: FastAPI app and HTTP client
    - Database Fixtures: in-memory SQLite engine and session
    - Product Fixtures: sample domain objects and stores
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from decimal import Decimal
import os
from typing import TYPE_CHECKING

from httpx import ASGITransport, AsyncClient
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

if TYPE_CHECKING:
    from fastapi import FastAPI
    from sqlalchemy.ext.asyncio import AsyncEngine

    from catalog_service.features.products.domain import Product

# Ensure tests run without external infrastructure
os.environ["DB_ENABLED"] = "false"
os.environ["COSMOS_ENABLED"] = "false"
os.environ["RABBIT_ENABLED"] = "false"
os.environ.setdefault("APP_ENVIRONMENT", "test")
os.environ.setdefault("LOG_FILE_ENABLED", "false")


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Reload settings from the environment for every test."""
    from catalog_service.core.settings import clear_all_settings_caches

    clear_all_settings_caches()
    yield
    clear_all_settings_caches()


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine]:
    """Configure the shared engine on a fresh in-memory SQLite database.

    ``StaticPool`` keeps a single connection so every session sees the same
    in-memory database.
    """
    from catalog_service.core.database import Base
    from catalog_service.features.products import models
    from catalog_service.infra.database import close_database, configure_engine

    _ = models
    engine = configure_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    try:
        yield engine
    finally:
        await close_database()


@pytest.fixture
async def db_session(db_engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    session_factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session


# ============================================================================
# Application Fixtures
# ============================================================================


@pytest.fixture
async def app(db_engine: AsyncEngine) -> FastAPI:
    """FastAPI application backed by the in-memory database.

    The lifespan does not run under ``ASGITransport``; the ``db_engine``
    fixture stands in for database startup.
    """
    from catalog_service.app.main import create_app

    _ = db_engine
    return create_app()


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


# ============================================================================
# Product Fixtures
# ============================================================================


@pytest.fixture
def make_product():
    """Factory for domain products with sensible defaults."""
    from catalog_service.features.products.domain import Product, ProductCategory

    def _make(
        product_id: int | None = None,
        name: str = "Desk Lamp",
        price: str = "24.50",
        category: ProductCategory = ProductCategory.ELECTRONICS,
        active: bool = True,
    ) -> Product:
        return Product(
            id=product_id,
            name=name,
            price=Decimal(price),
            category=category,
            active=active,
        )

    return _make


@pytest.fixture
async def sql_store(db_session: AsyncSession):
    from catalog_service.features.products.repository import SqlProductStore

    return SqlProductStore(db_session, timeout=5.0)


@pytest.fixture
async def seeded_products(sql_store, make_product) -> list[Product]:
    """Five active products, ids 1..5, names "Product 1".."Product 5"."""
    saved = []
    for index in range(1, 6):
        saved.append(await sql_store.save(make_product(name=f"Product {index}")))
    return saved
