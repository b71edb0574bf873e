"""Product business logic.

``ProductService`` persists through the primary (relational) store, serves
listings from the read store, and announces every state change with a
fire-and-forget ``ProductChangedEvent``. ``ProductUseCase`` is the thin
application layer the HTTP and web controllers call.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from catalog_service.core.exceptions import NotFoundException
from catalog_service.core.services import BaseService
from catalog_service.features.products.events import ProductChangedEvent
from catalog_service.features.products.filters import normalize_filter

if TYPE_CHECKING:
    from catalog_service.core.events import EventPublisher
    from catalog_service.core.pagination import PaginatedResult, PaginationQuery
    from catalog_service.features.products.domain import Product
    from catalog_service.features.products.filters import NormalizedFilter, ProductFilter
    from catalog_service.features.products.ports import ProductStore


class ProductService(BaseService):
    """Product operations over a primary store and an optional read store.

    Example:
        service = ProductService(sql_store, publisher, read_store=cosmos_store)
        created = await service.create(Product(name="Mug", price=Decimal("7.50"),
                                                category=ProductCategory.CLOTHING))
    """

    def __init__(
        self,
        store: ProductStore,
        publisher: EventPublisher,
        *,
        read_store: ProductStore | None = None,
    ) -> None:
        super().__init__()
        self.store = store
        self.read_store = read_store or store
        self.publisher = publisher

    async def create(self, product: Product) -> Product:
        saved = await self.store.save(product.with_id(None))
        self.logger.info(
            "Product created",
            extra={"product_id": saved.id, "category": saved.category.value},
        )
        self._announce(saved)
        return saved

    async def get_all_active(
        self,
        query: PaginationQuery,
        criteria: NormalizedFilter,
    ) -> PaginatedResult[Product]:
        return await self.read_store.find_active_products(query, criteria)

    async def get_active_by_id(self, product_id: int) -> Product:
        product = await self.store.find_active_by_id(product_id)
        if product is None:
            raise NotFoundException(
                detail=f"Active product not found with id: {product_id}",
                extra={"product_id": product_id},
            )
        return product

    async def get_by_id(self, product_id: int) -> Product:
        product = await self.store.find_by_id(product_id)
        if product is None:
            raise NotFoundException(
                detail=f"Product not found with id: {product_id}",
                extra={"product_id": product_id},
            )
        return product

    async def update(self, product_id: int, product_update: Product) -> Product:
        """Fully replace a product's fields, keeping its id.

        Raises:
            NotFoundException: If no product has ``product_id`` (any state).
        """
        existing = await self.get_by_id(product_id)
        saved = await self.store.save(product_update.with_id(existing.id))
        self.logger.info("Product updated", extra={"product_id": saved.id})
        self._announce(saved)
        return saved

    async def deactivate(self, product_id: int) -> None:
        product = await self.store.deactivate_product(product_id)
        self._announce(product)

    def _announce(self, product: Product) -> None:
        self._lazy.debug(lambda: f"Announcing product.changed for {product.id}")
        try:
            self.publisher.publish(ProductChangedEvent.from_product(product))
        except Exception as e:
            self.logger.error(
                "Failed to schedule product.changed event",
                extra={"product_id": product.id, "error": str(e)},
            )


class ProductUseCase:
    """Application entry points used by the REST and web controllers."""

    def __init__(self, service: ProductService) -> None:
        self._service = service

    async def create_product(self, product: Product) -> Product:
        return await self._service.create(product)

    async def get_all_active_products(
        self,
        query: PaginationQuery,
        product_filter: ProductFilter,
    ) -> PaginatedResult[Product]:
        criteria = normalize_filter(
            product_filter.category, product_filter.name, product_filter.active,
        )
        return await self._service.get_all_active(query, criteria)

    async def get_active_product_by_id(self, product_id: int) -> Product:
        return await self._service.get_active_by_id(product_id)

    async def get_product_by_id(self, product_id: int) -> Product:
        return await self._service.get_by_id(product_id)

    async def update_product(self, product_id: int, product: Product) -> Product:
        return await self._service.update(product_id, product)

    async def deactivate_product(self, product_id: int) -> None:
        await self._service.deactivate(product_id)


__all__ = ["ProductService", "ProductUseCase"]
