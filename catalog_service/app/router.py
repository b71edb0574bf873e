"""Router registry and setup."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from catalog_service.core.settings import get_app_settings
from catalog_service.features.health.router import router as health_router
from catalog_service.features.products.router import router as products_router
from catalog_service.features.products.web import router as products_web_router
from catalog_service.infra.messaging.broker import get_router as get_rabbit_router

if TYPE_CHECKING:
    from fastapi import FastAPI

    from catalog_service.core.settings.app import AppSettings

logger = logging.getLogger(__name__)


def setup_routers(app: FastAPI, app_settings: AppSettings | None = None) -> None:
    """Register all feature routers with the application.

    Args:
        app: FastAPI application instance.
        app_settings: Optional application settings override for prefixes.
    """
    app_settings = app_settings or get_app_settings()
    api_prefix = app_settings.api_prefix

    app.include_router(products_router, prefix=api_prefix, tags=["products"])
    app.include_router(health_router, prefix=api_prefix, tags=["health"])
    app.include_router(products_web_router, prefix=app_settings.web_prefix, include_in_schema=False)

    # RabbitRouter carries the subscribers and serves AsyncAPI docs at /asyncapi
    rabbit_router = get_rabbit_router()
    rabbit_enabled = False
    if rabbit_router is not None:
        app.include_router(rabbit_router, tags=["messaging"])
        rabbit_enabled = True
        logger.info("RabbitMQ router included - AsyncAPI docs at /asyncapi")

    logger.info(
        "Router setup complete",
        extra={
            "api_prefix": api_prefix,
            "web_prefix": app_settings.web_prefix,
            "rabbitmq_enabled": rabbit_enabled,
        },
    )


__all__ = ["setup_routers"]
