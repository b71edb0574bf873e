"""RabbitMQ broker configuration using FastStream.

Provides the ``RabbitRouter`` used for FastAPI integration (and AsyncAPI docs
at ``/asyncapi``), start/stop helpers for the application lifespan, and
``publish_event`` which the event publisher uses as its sender.

The router is created on first use so settings can be adjusted (tests, CLI)
before anything connects.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from catalog_service.core.settings import get_rabbit_settings
from catalog_service.infra.messaging.exchanges import get_events_exchange

if TYPE_CHECKING:
    from faststream.rabbit import RabbitBroker
    from faststream.rabbit.fastapi import RabbitRouter as RabbitRouterType

    from catalog_service.core.events import DomainEvent
else:
    RabbitRouterType = Any

logger = logging.getLogger(__name__)

router: RabbitRouterType | None = None
broker: RabbitBroker | None = None
_not_configured_logged = False


def _ensure_router_initialized() -> RabbitRouterType | None:
    """Create the RabbitRouter and register subscribers on first use."""
    global router, broker, _not_configured_logged

    if router is not None:
        return router

    rabbit_settings = get_rabbit_settings()
    if not rabbit_settings.is_configured:
        if not _not_configured_logged:
            logger.warning("RabbitMQ not configured - messaging features disabled")
            _not_configured_logged = True
        return None

    from faststream.rabbit.fastapi import RabbitRouter

    router = RabbitRouter(
        url=rabbit_settings.get_url(),
        graceful_timeout=rabbit_settings.graceful_timeout,
        logger=logger,
        schema_url="/asyncapi",
        include_in_schema=True,
    )
    broker = router.broker

    if rabbit_settings.consumer_enabled:
        from catalog_service.infra.messaging.handlers import register_handlers

        register_handlers(router)

    return router


def get_router() -> RabbitRouterType | None:
    """Get the RabbitMQ router for FastAPI integration.

    Returns:
        RabbitRouter instance or None if not configured.
    """
    return _ensure_router_initialized()


def get_broker() -> RabbitBroker | None:
    _ensure_router_initialized()
    return broker


async def start_broker() -> None:
    """Start the RabbitMQ broker connection.

    The connection is bounded by ``RABBIT_CONNECTION_TIMEOUT``. A broker
    already started by the FastAPI router integration is left alone.

    Raises:
        ConnectionError: If the connection attempt times out.
    """
    _ensure_router_initialized()
    rabbit_settings = get_rabbit_settings()

    if broker is None:
        logger.warning("RabbitMQ not configured, skipping broker startup")
        return

    if getattr(broker, "running", False):
        logger.debug("RabbitMQ broker already running (connected via RabbitRouter)")
        return

    logger.info(
        "Starting RabbitMQ broker",
        extra={
            "host": rabbit_settings.host,
            "port": rabbit_settings.port,
            "vhost": rabbit_settings.vhost,
            "connection_timeout": rabbit_settings.connection_timeout,
        },
    )

    try:
        await asyncio.wait_for(broker.start(), timeout=rabbit_settings.connection_timeout)
        logger.info("RabbitMQ broker started successfully")
    except TimeoutError:
        error_msg = f"RabbitMQ connection timeout after {rabbit_settings.connection_timeout}s"
        logger.error(error_msg, extra={"connection_timeout": rabbit_settings.connection_timeout})
        raise ConnectionError(error_msg) from None


async def stop_broker() -> None:
    """Stop the RabbitMQ broker connection."""
    if broker is None:
        logger.debug("RabbitMQ not configured, skipping broker shutdown")
        return

    logger.info("Stopping RabbitMQ broker")
    try:
        await broker.close()
        logger.info("RabbitMQ broker stopped successfully")
    except Exception as e:
        logger.exception("Error stopping RabbitMQ broker", extra={"error": str(e)})


def is_broker_running() -> bool:
    return broker is not None and bool(getattr(broker, "running", False))


async def publish_event(event: DomainEvent) -> None:
    """Publish ``event`` to the catalog events exchange.

    The routing key is the event type; the message id is the event's message
    key (the product id for product events).

    Raises:
        RuntimeError: If the broker is not configured or not running.
        TimeoutError: If the publish exceeds ``RABBIT_PUBLISH_TIMEOUT``.
    """
    if not is_broker_running():
        msg = "RabbitMQ broker is not running"
        raise RuntimeError(msg)
    assert broker is not None

    async with asyncio.timeout(get_rabbit_settings().publish_timeout):
        await broker.publish(
            message=event.model_dump(mode="json"),
            exchange=get_events_exchange(),
            routing_key=event.routing_key,
            message_id=event.message_key,
            correlation_id=event.correlation_id,
            headers=event.headers(),
        )


def reset_broker() -> None:
    """Forget the router and broker so the next use rebuilds them from settings."""
    global router, broker, _not_configured_logged
    router = None
    broker = None
    _not_configured_logged = False


__all__ = [
    "get_broker",
    "get_router",
    "is_broker_running",
    "publish_event",
    "reset_broker",
    "start_broker",
    "stop_broker",
]
