"""Tests for ProductService and ProductUseCase."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from catalog_service.core.exceptions import InvalidArgumentException, NotFoundException
from catalog_service.core.pagination import PaginatedResult, PaginationQuery
from catalog_service.features.products.events import ProductChangedEvent
from catalog_service.features.products.filters import NormalizedFilter, ProductFilter
from catalog_service.features.products.service import ProductService, ProductUseCase


@pytest.fixture
def store() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def publisher() -> MagicMock:
    return MagicMock()


@pytest.fixture
def service(store, publisher) -> ProductService:
    return ProductService(store, publisher)


class TestCreate:
    async def test_saves_without_client_id_and_announces(
        self, service, store, publisher, make_product,
    ):
        store.save.return_value = make_product(product_id=1)

        created = await service.create(make_product(product_id=77))

        assert created.id == 1
        assert store.save.await_args.args[0].id is None
        event = publisher.publish.call_args.args[0]
        assert isinstance(event, ProductChangedEvent)
        assert event.product_id == 1

    async def test_publish_failure_does_not_fail_the_write(
        self, service, store, publisher, make_product, caplog,
    ):
        store.save.return_value = make_product(product_id=1)
        publisher.publish.side_effect = RuntimeError("boom")

        with caplog.at_level("ERROR"):
            created = await service.create(make_product())

        assert created.id == 1
        assert "Failed to schedule product.changed event" in caplog.text


class TestReads:
    async def test_get_active_by_id_not_found(self, service, store):
        store.find_active_by_id.return_value = None

        with pytest.raises(NotFoundException, match="Active product not found with id: 5"):
            await service.get_active_by_id(5)

    async def test_get_by_id_not_found(self, service, store):
        store.find_by_id.return_value = None

        with pytest.raises(NotFoundException, match="Product not found with id: 5"):
            await service.get_by_id(5)

    async def test_listing_goes_to_read_store(self, store, publisher):
        read_store = AsyncMock()
        read_store.find_active_products.return_value = PaginatedResult(limit=5)
        service = ProductService(store, publisher, read_store=read_store)

        await service.get_all_active(PaginationQuery(limit=5), NormalizedFilter())

        read_store.find_active_products.assert_awaited_once()
        store.find_active_products.assert_not_awaited()

    async def test_listing_defaults_to_primary_store(self, service, store):
        store.find_active_products.return_value = PaginatedResult()

        await service.get_all_active(PaginationQuery(), NormalizedFilter())

        store.find_active_products.assert_awaited_once()


class TestUpdate:
    async def test_replaces_fields_keeping_id(self, service, store, publisher, make_product):
        store.find_by_id.return_value = make_product(product_id=3, active=False)
        store.save.side_effect = lambda product: product

        updated = await service.update(3, make_product(product_id=99, name="New Name"))

        assert updated.id == 3
        assert updated.name == "New Name"
        publisher.publish.assert_called_once()

    async def test_missing_product(self, service, store, publisher, make_product):
        store.find_by_id.return_value = None

        with pytest.raises(NotFoundException):
            await service.update(3, make_product())

        store.save.assert_not_awaited()
        publisher.publish.assert_not_called()


class TestDeactivate:
    async def test_announces_inactive_state(self, service, store, publisher, make_product):
        store.deactivate_product.return_value = make_product(product_id=3, active=False)

        await service.deactivate(3)

        event = publisher.publish.call_args.args[0]
        assert event.active is False

    async def test_missing_product(self, service, store, publisher):
        store.deactivate_product.side_effect = NotFoundException("Product not found with id: 3")

        with pytest.raises(NotFoundException):
            await service.deactivate(3)

        publisher.publish.assert_not_called()


class TestUseCase:
    async def test_normalizes_filter_before_listing(self, service, store):
        store.find_active_products.return_value = PaginatedResult()
        use_case = ProductUseCase(service)

        await use_case.get_all_active_products(
            PaginationQuery(), ProductFilter(category="books", name=" Cook "),
        )

        criteria = store.find_active_products.await_args.args[1]
        assert criteria.category.value == "BOOKS"
        assert criteria.name == "cook"

    async def test_invalid_category(self, service):
        use_case = ProductUseCase(service)

        with pytest.raises(InvalidArgumentException):
            await use_case.get_all_active_products(
                PaginationQuery(), ProductFilter(category="garden"),
            )
