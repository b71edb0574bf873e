"""Relational product store.

Implements :class:`ProductStore` over an SQLAlchemy ``AsyncSession``. Ids are
assigned by the database on first insert. Listing goes through the shared
cursor engine; this module only supplies the id-seek window query.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import func, select

from catalog_service.core.exceptions import NotFoundException
from catalog_service.core.pagination import CursorPaginator
from catalog_service.core.services import BaseService
from catalog_service.features.products.domain import Product
from catalog_service.features.products.models import ProductEntity
from catalog_service.infra.resilience import store_call

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy import Select
    from sqlalchemy.ext.asyncio import AsyncSession

    from catalog_service.core.pagination import PaginatedResult, PaginationQuery
    from catalog_service.features.products.filters import NormalizedFilter


def to_domain(entity: ProductEntity) -> Product:
    return Product(
        id=entity.id,
        name=entity.name,
        price=entity.price,
        category=entity.category,
        active=entity.active,
    )


def to_entity(product: Product) -> ProductEntity:
    entity = ProductEntity(
        name=product.name,
        price=product.price,
        category=product.category,
        active=product.active,
    )
    if product.id is not None:
        entity.id = product.id
    return entity


class SqlProductStore(BaseService):
    """Product store backed by PostgreSQL (or SQLite).

    Every public call commits its own unit of work and runs under the
    ``timeout`` budget.

    Example:
        async with get_async_session() as session:
            store = SqlProductStore(session, timeout=5.0)
            saved = await store.save(Product(name="Book", price=Decimal("9.99"),
                                             category=ProductCategory.BOOKS))
    """

    def __init__(self, session: AsyncSession, *, timeout: float = 5.0) -> None:
        super().__init__()
        self._session = session
        self._timeout = timeout
        self._paginator: CursorPaginator[Product] = CursorPaginator(key=lambda p: p.id)

    async def save(self, product: Product) -> Product:
        entity = to_entity(product)
        async with store_call("products.save", self._timeout):
            if product.id is None:
                self._session.add(entity)
            else:
                entity = await self._session.merge(entity)
            await self._session.commit()
            await self._session.refresh(entity)

        saved = to_domain(entity)
        self._lazy.debug(lambda: f"db.save: Product(id={saved.id}, new={product.id is None})")
        return saved

    async def find_by_id(self, product_id: int) -> Product | None:
        async with store_call("products.find_by_id", self._timeout):
            entity = await self._session.get(ProductEntity, product_id)
        return to_domain(entity) if entity is not None else None

    async def find_active_by_id(self, product_id: int) -> Product | None:
        stmt = select(ProductEntity).where(
            ProductEntity.id == product_id,
            ProductEntity.active.is_(True),
        )
        async with store_call("products.find_active_by_id", self._timeout):
            result = await self._session.execute(stmt)
            entity = result.scalar_one_or_none()
        return to_domain(entity) if entity is not None else None

    async def find_active_products(
        self,
        query: PaginationQuery,
        criteria: NormalizedFilter,
    ) -> PaginatedResult[Product]:
        return await self._paginator.paginate(self.fetch_window, query, criteria)

    async def fetch_window(
        self,
        resume_key: int | None,
        criteria: NormalizedFilter,
        limit: int,
        *,
        descending: bool = False,
    ) -> Sequence[Product]:
        """Return up to ``limit`` matching products strictly past ``resume_key``."""
        stmt = self._window_statement(resume_key, criteria, limit, descending=descending)
        async with store_call("products.fetch_window", self._timeout):
            result = await self._session.execute(stmt)
            entities = result.scalars().all()

        self._lazy.debug(
            lambda: (
                f"db.fetch_window: Product(after={resume_key}, limit={limit}, "
                f"desc={descending}) -> {len(entities)} rows"
            ),
        )
        return [to_domain(entity) for entity in entities]

    @staticmethod
    def _window_statement(
        resume_key: int | None,
        criteria: NormalizedFilter,
        limit: int,
        *,
        descending: bool,
    ) -> Select[tuple[ProductEntity]]:
        stmt = select(ProductEntity).where(ProductEntity.active == criteria.active)

        if resume_key is not None:
            stmt = stmt.where(
                ProductEntity.id < resume_key if descending else ProductEntity.id > resume_key,
            )
        if criteria.category is not None:
            stmt = stmt.where(ProductEntity.category == criteria.category)
        if criteria.name is not None:
            stmt = stmt.where(
                func.lower(ProductEntity.name).contains(criteria.name, autoescape=True),
            )

        order = ProductEntity.id.desc() if descending else ProductEntity.id.asc()
        return stmt.order_by(order).limit(limit)

    async def deactivate_product(self, product_id: int) -> Product:
        async with store_call("products.deactivate", self._timeout):
            entity = await self._session.get(ProductEntity, product_id)
            if entity is None:
                raise NotFoundException(
                    detail=f"Product not found with id: {product_id}",
                    extra={"product_id": product_id},
                )

            if not entity.active:
                self.logger.info(
                    "Product already inactive",
                    extra={"product_id": product_id, "operation": "db.deactivate"},
                )
                return to_domain(entity)

            entity.active = False
            await self._session.commit()
            await self._session.refresh(entity)

        self.logger.info(
            "Product deactivated",
            extra={"product_id": product_id, "operation": "db.deactivate"},
        )
        return to_domain(entity)


__all__ = ["SqlProductStore", "to_domain", "to_entity"]
