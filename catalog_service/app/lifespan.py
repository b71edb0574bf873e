"""Application lifespan management.

Startup Order:
1. Core (logging) - always runs first
2. Database (PostgreSQL or SQLite fallback) - connectivity check and schema create
3. Documents (Cosmos DB) - conditional on configuration
4. Messaging (RabbitMQ) - conditional on configuration

Shutdown Order: Reverse of startup, after in-flight events are drained.

A dependency whose ``startup_require_*`` flag is off is allowed to fail; the
service then runs in degraded mode (reads fall back to the relational store,
events are dropped).
"""

from __future__ import annotations

from contextlib import asynccontextmanager
import logging
from typing import TYPE_CHECKING

from catalog_service.core.settings import (
    get_app_settings,
    get_cosmos_settings,
    get_db_settings,
    get_logging_settings,
    get_rabbit_settings,
)
from catalog_service.infra.logging.config import setup_logging

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from fastapi import FastAPI

logger = logging.getLogger(__name__)


# =============================================================================
# Startup functions - organized by service
# =============================================================================


async def _startup_core() -> None:
    """Configure logging."""
    app = get_app_settings()
    setup_logging(log_settings=get_logging_settings(), force=True)
    logger.info(
        "Application starting",
        extra={"service": app.service_name, "environment": app.environment},
    )


async def _startup_database() -> None:
    """Verify the relational store and create missing tables."""
    from catalog_service.infra.database import init_database

    db = get_db_settings()

    try:
        await init_database()
        logger.info(
            "Database connection initialized",
            extra={"backend": "postgresql" if db.is_configured else "sqlite"},
        )
    except Exception as e:
        if db.startup_require_db:
            logger.exception(
                "Database required but unavailable, failing startup",
                extra={"error": str(e), "startup_require_db": True},
            )
            raise
        logger.warning(
            "Database unavailable, continuing in degraded mode",
            extra={"error": str(e), "startup_require_db": False},
        )


async def _startup_documents() -> None:
    """Connect the Cosmos DB read model."""
    from catalog_service.infra.documents import start_documents

    settings = get_cosmos_settings()

    if not settings.is_configured:
        return

    try:
        await start_documents()
        logger.info("Cosmos DB document store initialized")
        if not get_rabbit_settings().is_configured:
            logger.warning(
                "RabbitMQ not configured; the document store will not be synced, "
                "listings are served from the relational store",
            )
    except Exception as e:
        if settings.startup_require_cosmos:
            logger.exception("Cosmos DB required but unavailable, failing startup")
            raise
        logger.warning(
            "Cosmos DB unavailable, continuing in degraded mode",
            extra={"error": str(e), "startup_require_cosmos": False},
        )


async def _startup_messaging() -> None:
    """Initialize RabbitMQ/FastStream broker."""
    from catalog_service.infra.messaging import start_broker

    settings = get_rabbit_settings()

    if not settings.is_configured:
        return

    try:
        await start_broker()
        logger.info("RabbitMQ/FastStream broker initialized")
    except Exception as e:
        if settings.startup_require_rabbit:
            logger.exception("RabbitMQ required but unavailable, failing startup")
            raise
        logger.warning(
            "RabbitMQ unavailable, continuing in degraded mode",
            extra={"error": str(e), "startup_require_rabbit": False},
        )


# =============================================================================
# Shutdown functions
# =============================================================================


async def _shutdown_publisher() -> None:
    """Give in-flight change events a bounded grace period."""
    from catalog_service.infra.messaging.publisher import drain_event_publisher

    await drain_event_publisher()


async def _shutdown_messaging() -> None:
    from catalog_service.infra.messaging import stop_broker

    if not get_rabbit_settings().is_configured:
        return

    await stop_broker()
    logger.info("RabbitMQ broker closed")


async def _shutdown_documents() -> None:
    from catalog_service.infra.documents import stop_documents

    await stop_documents()


async def _shutdown_database() -> None:
    from catalog_service.infra.database import close_database

    await close_database()
    logger.info("Database connection closed")


# =============================================================================
# Main lifespan context manager
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifecycle.

    Args:
        app: FastAPI application instance.

    Yields:
        None during application runtime.
    """
    _ = app

    await _startup_core()
    await _startup_database()
    await _startup_documents()
    await _startup_messaging()

    app_settings = get_app_settings()
    logger.info(
        "Application startup complete - listening on %s:%s",
        app_settings.host,
        app_settings.port,
        extra={
            "service": app_settings.service_name,
            "environment": app_settings.environment,
            "database": "postgresql" if get_db_settings().is_configured else "sqlite",
            "documents_enabled": get_cosmos_settings().is_configured,
            "messaging_enabled": get_rabbit_settings().is_configured,
        },
    )

    yield

    logger.info("Application shutting down", extra={"service": app_settings.service_name})

    await _shutdown_publisher()
    await _shutdown_messaging()
    await _shutdown_documents()
    await _shutdown_database()

    logger.info("Application shutdown complete")


__all__ = ["lifespan"]
