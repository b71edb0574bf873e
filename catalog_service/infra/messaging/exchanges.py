"""FastStream exchange and queue definitions.

Product change events are published to a durable topic exchange under the
``product.changed`` routing key; the document-store projection consumes them
from a durable queue bound to that key.
"""

from __future__ import annotations

from functools import lru_cache

from faststream.rabbit import ExchangeType, RabbitExchange, RabbitQueue

from catalog_service.core.settings import get_rabbit_settings

PRODUCT_CHANGED_ROUTING_KEY = "product.changed"


@lru_cache(maxsize=1)
def get_events_exchange() -> RabbitExchange:
    """Catalog events exchange (topic, durable)."""
    return RabbitExchange(
        name=get_rabbit_settings().exchange_name,
        type=ExchangeType.TOPIC,
        durable=True,
        auto_delete=False,
    )


@lru_cache(maxsize=1)
def get_product_changes_queue() -> RabbitQueue:
    """Queue feeding the document-store projection."""
    return RabbitQueue(
        name=get_rabbit_settings().product_changes_queue,
        durable=True,
        auto_delete=False,
        routing_key=PRODUCT_CHANGED_ROUTING_KEY,
    )


__all__ = [
    "PRODUCT_CHANGED_ROUTING_KEY",
    "get_events_exchange",
    "get_product_changes_queue",
]
