"""Tests for the product.changed consumer."""

from __future__ import annotations

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from catalog_service.features.products.domain import Product, ProductCategory
from catalog_service.features.products.events import ProductChangedEvent
from catalog_service.infra.messaging.handlers import apply_product_change, handle_product_changed


@pytest.fixture
def body() -> dict:
    product = Product(
        id=12, name="Cookbook", price=Decimal("18.00"), category=ProductCategory.BOOKS,
    )
    return ProductChangedEvent.from_product(product).model_dump(mode="json")


async def test_upserts_the_carried_product(body):
    store = AsyncMock()

    assert await apply_product_change(body, store) is True

    saved = store.save.await_args.args[0]
    assert saved.id == 12
    assert saved.price == Decimal("18.00")
    assert saved.category is ProductCategory.BOOKS


async def test_store_failure_is_logged_and_swallowed(body, caplog):
    store = AsyncMock()
    store.save.side_effect = RuntimeError("cosmos unavailable")

    with caplog.at_level("ERROR"):
        assert await apply_product_change(body, store) is False

    assert "Failed to process product.changed event" in caplog.text


async def test_malformed_message_is_discarded(caplog):
    store = AsyncMock()

    with caplog.at_level("ERROR"):
        assert await apply_product_change({"product_id": "nope"}, store) is False

    store.save.assert_not_awaited()
    assert "Discarding malformed product.changed message" in caplog.text


async def test_without_document_store_the_message_is_skipped(body):
    assert await apply_product_change(body) is False


async def test_subscriber_never_raises(body, monkeypatch: pytest.MonkeyPatch):
    store = AsyncMock()
    store.save.side_effect = RuntimeError("boom")
    monkeypatch.setattr("catalog_service.infra.messaging.handlers._default_store", lambda: store)

    await handle_product_changed(body)

    store.save.assert_awaited_once()
