"""RabbitMQ messaging via FastStream."""

from __future__ import annotations

from .broker import (
    get_broker,
    get_router,
    is_broker_running,
    publish_event,
    reset_broker,
    start_broker,
    stop_broker,
)

__all__ = [
    "get_broker",
    "get_router",
    "is_broker_running",
    "publish_event",
    "reset_broker",
    "start_broker",
    "stop_broker",
]
