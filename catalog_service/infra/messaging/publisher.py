"""Process-wide event publisher wired to the RabbitMQ broker."""

from __future__ import annotations

import logging

from catalog_service.core.events import EventPublisher
from catalog_service.core.settings import get_rabbit_settings
from catalog_service.infra.messaging.broker import publish_event

logger = logging.getLogger(__name__)

_publisher: EventPublisher | None = None


def get_event_publisher() -> EventPublisher:
    """Return the shared publisher, creating it on first use.

    When RabbitMQ is disabled the publisher has no sender and skips events.
    """
    global _publisher

    if _publisher is None:
        settings = get_rabbit_settings()
        _publisher = EventPublisher(
            send=publish_event if settings.is_configured else None,
            max_pending=settings.max_pending_publishes,
        )
    return _publisher


async def drain_event_publisher() -> None:
    """Wait for in-flight events at shutdown and forget the shared publisher."""
    global _publisher

    if _publisher is None:
        return
    await _publisher.drain(timeout=get_rabbit_settings().shutdown_drain_timeout)
    _publisher = None


__all__ = ["drain_event_publisher", "get_event_publisher"]
