"""Message handlers for consuming events from the broker.

The product-changes subscriber keeps the document store in step with the
relational store. Every message is acknowledged: processing failures are
logged and the message is dropped, never retried or redelivered.

AsyncAPI Documentation:
    Handlers registered here appear in the AsyncAPI docs at /asyncapi
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from catalog_service.core.settings import get_app_settings
from catalog_service.features.products.documents import CosmosProductStore
from catalog_service.features.products.events import ProductChangedEvent
from catalog_service.infra.documents import get_document_client
from catalog_service.infra.messaging.exchanges import (
    get_events_exchange,
    get_product_changes_queue,
)

if TYPE_CHECKING:
    from faststream.rabbit.fastapi import RabbitRouter

    from catalog_service.features.products.ports import ProductStore

logger = logging.getLogger(__name__)


def _default_store() -> ProductStore | None:
    client = get_document_client()
    if client is None:
        return None
    return CosmosProductStore(client, timeout=get_app_settings().store_call_timeout)


async def apply_product_change(
    body: dict[str, Any],
    store: ProductStore | None = None,
) -> bool:
    """Upsert the product carried by a change event into the document store.

    Args:
        body: Decoded message body.
        store: Target store; defaults to the Cosmos DB store when connected.

    Returns:
        True if the product was written, False if the message was skipped or
        failed. Never raises.
    """
    try:
        event = ProductChangedEvent.model_validate(body)
    except ValidationError as e:
        event_id = body.get("event_id") if isinstance(body, dict) else None
        logger.error(
            "Discarding malformed product.changed message",
            extra={"error": str(e), "event_id": event_id},
        )
        return False

    target = store if store is not None else _default_store()
    if target is None:
        logger.debug(
            "Document store unavailable, skipping product.changed",
            extra={"event_id": event.event_id, "product_id": event.product_id},
        )
        return False

    try:
        await target.save(event.to_product())
    except Exception as e:
        logger.exception(
            "Failed to process product.changed event",
            extra={"event_id": event.event_id, "product_id": event.product_id, "error": str(e)},
        )
        return False

    logger.info(
        "Successfully processed product.changed event",
        extra={"event_id": event.event_id, "product_id": event.product_id},
    )
    return True


async def handle_product_changed(body: dict[str, Any]) -> None:
    """Handle product.changed events; the message is acked whatever happens."""
    await apply_product_change(body)


def register_handlers(router: RabbitRouter) -> None:
    """Attach the catalog subscribers to ``router``."""
    router.subscriber(
        get_product_changes_queue(),
        exchange=get_events_exchange(),
    )(handle_product_changed)
    logger.debug("Registered product.changed subscriber")


__all__ = ["apply_product_change", "handle_product_changed", "register_handlers"]
