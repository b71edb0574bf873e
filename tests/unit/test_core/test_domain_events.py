"""Tests for domain events and the fire-and-forget publisher."""

from __future__ import annotations

import asyncio
from decimal import Decimal
from typing import ClassVar

import pytest

from catalog_service.core.events import DomainEvent, EventPublisher
from catalog_service.features.products.domain import Product, ProductCategory
from catalog_service.features.products.events import ProductChangedEvent


@pytest.fixture
def event() -> ProductChangedEvent:
    product = Product(
        id=7, name="Desk Lamp", price=Decimal("24.50"), category=ProductCategory.ELECTRONICS,
    )
    return ProductChangedEvent.from_product(product)


# ──────────────────────────────────────────────────────────────
# DomainEvent
# ──────────────────────────────────────────────────────────────


class TestDomainEvent:
    def test_subclass_must_define_event_type(self):
        with pytest.raises(TypeError, match="event_type"):

            class Untyped(DomainEvent):
                pass

    def test_version_travels_in_headers(self):
        class Sample(DomainEvent):
            event_type: ClassVar[str] = "sample.happened"
            event_version: ClassVar[int] = 2

        assert Sample().headers()["x-event-version"] == "2"

    def test_generated_fields(self, event: ProductChangedEvent):
        assert event.event_id
        assert event.timestamp.tzinfo is not None
        assert event.service == "catalog-service"

    def test_headers_include_correlation_when_set(self, event: ProductChangedEvent):
        correlated = event.model_copy(update={"correlation_id": "req-1"})

        headers = correlated.headers()

        assert headers["x-event-type"] == "product.changed"
        assert headers["x-correlation-id"] == "req-1"
        assert "x-correlation-id" not in event.headers()


# ──────────────────────────────────────────────────────────────
# ProductChangedEvent
# ──────────────────────────────────────────────────────────────


class TestProductChangedEvent:
    def test_routing_and_message_key(self, event: ProductChangedEvent):
        assert event.routing_key == "product.changed"
        assert event.message_key == "7"
        assert event.headers()["x-product-id"] == "7"

    def test_unsaved_product_cannot_be_announced(self):
        product = Product(name="Mug", price=Decimal("3"), category=ProductCategory.CLOTHING)

        with pytest.raises(ValueError, match="unsaved"):
            ProductChangedEvent.from_product(product)

    def test_survives_the_wire(self, event: ProductChangedEvent):
        body = event.model_dump(mode="json")

        restored = ProductChangedEvent.model_validate(body)

        assert restored.to_product() == event.to_product()
        assert restored.event_id == event.event_id


# ──────────────────────────────────────────────────────────────
# EventPublisher
# ──────────────────────────────────────────────────────────────


class TestEventPublisher:
    async def test_publish_returns_before_delivery(self, event):
        release = asyncio.Event()
        delivered: list[str] = []

        async def send(evt):
            await release.wait()
            delivered.append(evt.message_key)

        publisher = EventPublisher(send)
        publisher.publish(event)

        assert delivered == []
        assert publisher.pending == 1

        release.set()
        await publisher.drain(timeout=1.0)

        assert delivered == ["7"]
        assert publisher.pending == 0

    async def test_send_failure_is_logged_not_raised(self, event, caplog):
        async def send(evt):
            raise ConnectionError("broker down")

        publisher = EventPublisher(send)
        with caplog.at_level("ERROR"):
            publisher.publish(event)
            await publisher.drain(timeout=1.0)

        assert "Failed to publish event" in caplog.text

    async def test_disabled_publisher_skips(self, event):
        publisher = EventPublisher(None)

        publisher.publish(event)

        assert publisher.pending == 0

    async def test_drops_when_too_many_in_flight(self, event, caplog):
        release = asyncio.Event()
        sent: list[str] = []

        async def send(evt):
            await release.wait()
            sent.append(evt.event_id)

        publisher = EventPublisher(send, max_pending=1)
        with caplog.at_level("WARNING"):
            publisher.publish(event)
            publisher.publish(event)

        assert publisher.pending == 1
        assert "dropping event" in caplog.text

        release.set()
        await publisher.drain(timeout=1.0)
        assert len(sent) == 1

    async def test_drain_cancels_stragglers(self, event):
        async def send(evt):
            await asyncio.sleep(10)

        publisher = EventPublisher(send)
        publisher.publish(event)

        await publisher.drain(timeout=0.01)

        assert publisher.pending == 0

    def test_publish_without_running_loop_drops(self, event):
        async def send(evt):
            return None

        publisher = EventPublisher(send)
        publisher.publish(event)

        assert publisher.pending == 0
