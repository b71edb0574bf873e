"""Bounded store calls.

Every relational or document store round-trip runs under a time budget so a
stalled backend surfaces as a transient 503 instead of hanging the request.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
import logging

from catalog_service.core.exceptions import StoreTimeoutException

logger = logging.getLogger(__name__)


@asynccontextmanager
async def store_call(operation: str, timeout: float) -> AsyncIterator[None]:
    """Run the enclosed store call under ``timeout`` seconds.

    Args:
        operation: Name used in logs and in the raised exception.
        timeout: Time budget in seconds.

    Raises:
        StoreTimeoutException: If the budget is exceeded.

    Example:
        async with store_call("products.find_by_id", 5.0):
            entity = await session.get(ProductEntity, product_id)
    """
    try:
        async with asyncio.timeout(timeout):
            yield
    except TimeoutError as exc:
        logger.warning(
            "Store call timed out",
            extra={"operation": operation, "timeout": timeout},
        )
        raise StoreTimeoutException(operation=operation, timeout=timeout) from exc
