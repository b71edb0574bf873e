"""Async database session management.

The engine is created on first use from ``PostgresSettings`` so tests and the
CLI can point it elsewhere (``configure_engine``) before anything connects.
When PostgreSQL is not configured the engine falls back to a local SQLite
file through aiosqlite.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
import logging
from typing import TYPE_CHECKING

from sqlalchemy import event, text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from catalog_service.core.database import Base
from catalog_service.core.settings import get_app_settings, get_db_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

logger = logging.getLogger(__name__)

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def _redact(url: str) -> str:
    return make_url(url).render_as_string(hide_password=True)


def _unicode_lower(value: str | None) -> str | None:
    return None if value is None else value.lower()


def _register_sqlite_functions(dbapi_connection: object, connection_record: object) -> None:
    """Replace SQLite's ASCII-only ``lower()`` with full Unicode case folding."""
    dbapi_connection.create_function("lower", 1, _unicode_lower, deterministic=True)  # type: ignore[attr-defined]


def configure_engine(url: str | None = None, **engine_kwargs: object) -> AsyncEngine:
    """Create (or replace) the process-wide engine and session factory.

    Args:
        url: SQLAlchemy URL. Defaults to the configured database, or SQLite.
        **engine_kwargs: Overrides for ``create_async_engine``.

    Returns:
        The new engine.
    """
    global _engine, _session_factory

    db_settings = get_db_settings()
    app_settings = get_app_settings()

    target = url or db_settings.get_sqlalchemy_url()
    kwargs: dict[str, object] = {}
    if url is None:
        kwargs.update(db_settings.sqlalchemy_engine_kwargs())
        kwargs["echo"] = db_settings.echo or app_settings.debug
    kwargs.update(engine_kwargs)

    _engine = create_async_engine(target, **kwargs)
    if _engine.dialect.name == "sqlite":
        event.listen(_engine.sync_engine, "connect", _register_sqlite_functions)
    _session_factory = async_sessionmaker(
        _engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
    logger.debug("Database engine configured", extra={"url": _redact(target)})
    return _engine


def get_engine() -> AsyncEngine:
    if _engine is None:
        return configure_engine()
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    if _session_factory is None:
        configure_engine()
    assert _session_factory is not None
    return _session_factory


@asynccontextmanager
async def get_async_session() -> AsyncGenerator[AsyncSession]:
    """Get async database session.

    Yields:
        Database session that is automatically closed.

    Example:
        async with get_async_session() as session:
            result = await session.execute(select(ProductEntity))
    """
    async with get_session_factory()() as session:
        try:
            yield session
        finally:
            await session.close()


async def init_database(*, create_schema: bool | None = None) -> None:
    """Verify connectivity and optionally create missing tables.

    Args:
        create_schema: Run ``metadata.create_all``. Defaults to the
            ``DB_CREATE_SCHEMA`` setting.

    Raises:
        Exception: Whatever the driver raises when the database is unreachable.
    """
    db_settings = get_db_settings()
    if create_schema is None:
        create_schema = db_settings.create_schema

    engine = get_engine()
    url = engine.url.render_as_string(hide_password=True)

    # Register mapped tables on the shared metadata
    from catalog_service.features.products import models

    _ = models

    try:
        async with engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
            if create_schema:
                await conn.run_sync(Base.metadata.create_all)
        logger.info(
            "Database connection established successfully",
            extra={"url": url, "create_schema": create_schema},
        )
    except Exception as e:
        logger.error("Failed to connect to database", extra={"url": url, "error": str(e)})
        raise


async def close_database() -> None:
    """Dispose of the engine and reset the session factory."""
    global _engine, _session_factory

    if _engine is None:
        return

    logger.info("Closing database connection")
    try:
        await _engine.dispose()
        logger.info("Database connection closed successfully")
    except Exception as e:
        logger.exception("Error closing database connection", extra={"error": str(e)})
    finally:
        _engine = None
        _session_factory = None


__all__ = [
    "close_database",
    "configure_engine",
    "get_async_session",
    "get_engine",
    "get_session_factory",
    "init_database",
]
