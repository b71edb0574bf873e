"""Fire-and-forget event publisher.

``EventPublisher.publish`` schedules the broker send as a detached task and
returns immediately; the caller never waits for or observes the outcome.
Delivery is at-most-once and best-effort:

1. The send runs in its own ``asyncio`` task, tracked in a bounded set.
2. Success and failure are only logged.
3. On shutdown, ``drain`` waits a bounded time for in-flight sends.

Usage:
    publisher = EventPublisher(send=publish_event)
    publisher.publish(ProductChangedEvent.from_product(product))
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from catalog_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from catalog_service.core.events.base import DomainEvent

    EventSender = Callable[[DomainEvent], Awaitable[None]]

logger = logging.getLogger(__name__)
_lazy = get_lazy_logger(__name__)


class EventPublisher:
    """Publish domain events without blocking the caller.

    Attributes:
        max_pending: Upper bound on in-flight sends; events beyond it are
            dropped with a warning.
    """

    def __init__(
        self,
        send: EventSender | None,
        *,
        max_pending: int = 1000,
    ) -> None:
        """Initialize the publisher.

        Args:
            send: Coroutine function delivering one event to the broker, or
                None when messaging is disabled (events are logged and skipped).
            max_pending: Maximum number of concurrent in-flight sends.
        """
        self._send = send
        self.max_pending = max_pending
        self._pending: set[asyncio.Task[None]] = set()

    @property
    def pending(self) -> int:
        return len(self._pending)

    def publish(self, event: DomainEvent) -> None:
        """Schedule ``event`` for delivery and return immediately.

        Never raises; every failure is logged.
        """
        if self._send is None:
            _lazy.debug(
                lambda: f"Messaging disabled, skipping {event.event_type} ({event.message_key})",
            )
            return

        if len(self._pending) >= self.max_pending:
            logger.warning(
                "Too many in-flight events, dropping event",
                extra={
                    "event_type": event.event_type,
                    "event_id": event.event_id,
                    "message_key": event.message_key,
                    "pending": len(self._pending),
                },
            )
            return

        try:
            task = asyncio.get_running_loop().create_task(
                self._deliver(event), name=f"publish:{event.event_type}:{event.message_key}",
            )
        except RuntimeError:
            logger.warning(
                "No running event loop, dropping event",
                extra={"event_type": event.event_type, "event_id": event.event_id},
            )
            return

        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _deliver(self, event: DomainEvent) -> None:
        assert self._send is not None
        try:
            await self._send(event)
        except Exception as e:
            logger.error(
                "Failed to publish event",
                extra={
                    "event_type": event.event_type,
                    "event_id": event.event_id,
                    "message_key": event.message_key,
                    "error": str(e),
                },
            )
            return

        logger.info(
            "Event published",
            extra={
                "event_type": event.event_type,
                "event_id": event.event_id,
                "message_key": event.message_key,
            },
        )

    async def drain(self, timeout: float = 5.0) -> None:
        """Wait up to ``timeout`` seconds for in-flight sends, then cancel the rest."""
        if not self._pending:
            return

        tasks = list(self._pending)
        logger.info("Draining in-flight events", extra={"pending": len(tasks)})
        _, still_running = await asyncio.wait(tasks, timeout=timeout)

        for task in still_running:
            task.cancel()
        if still_running:
            await asyncio.gather(*still_running, return_exceptions=True)
            logger.warning(
                "Cancelled undelivered events at shutdown",
                extra={"cancelled": len(still_running)},
            )


__all__ = ["EventPublisher"]
