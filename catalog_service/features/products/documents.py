"""Document product store.

Implements :class:`ProductStore` over a Cosmos DB container. Documents keep
the string ``id`` Cosmos requires alongside a numeric ``product_id`` that the
window query seeks and orders on.

Document shape::

    {
        "id": "42",
        "product_id": 42,
        "name": "Desk Lamp",
        "price": "24.50",
        "category": "ELECTRONICS",
        "active": true
    }
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Any

from catalog_service.core.exceptions import NotFoundException
from catalog_service.core.pagination import CursorPaginator
from catalog_service.core.services import BaseService
from catalog_service.features.products.domain import Product, ProductCategory
from catalog_service.infra.resilience import store_call

if TYPE_CHECKING:
    from collections.abc import Sequence

    from catalog_service.core.pagination import PaginatedResult, PaginationQuery
    from catalog_service.features.products.filters import NormalizedFilter
    from catalog_service.infra.documents import DocumentClient


def to_document(product: Product) -> dict[str, Any]:
    if product.id is None:
        msg = "Product must have an id before it is stored as a document"
        raise ValueError(msg)
    return {
        "id": str(product.id),
        "product_id": product.id,
        "name": product.name,
        "price": str(product.price),
        "category": product.category.value,
        "active": product.active,
    }


def from_document(document: dict[str, Any]) -> Product:
    return Product(
        id=int(document["product_id"]),
        name=document["name"],
        price=Decimal(str(document["price"])),
        category=ProductCategory(document["category"]),
        active=bool(document.get("active", True)),
    )


class CosmosProductStore(BaseService):
    """Product store backed by a Cosmos DB container.

    Example:
        store = CosmosProductStore(get_document_client(), timeout=5.0)
        page = await store.find_active_products(PaginationQuery(limit=10), NormalizedFilter())
    """

    def __init__(self, client: DocumentClient, *, timeout: float = 5.0) -> None:
        super().__init__()
        self._client = client
        self._timeout = timeout
        self._paginator: CursorPaginator[Product] = CursorPaginator(key=lambda p: p.id)

    async def save(self, product: Product) -> Product:
        if product.id is None:
            product = product.with_id(await self._next_id())

        async with store_call("documents.save", self._timeout):
            stored = await self._client.upsert_item(to_document(product))

        self._lazy.debug(lambda: f"cosmos.save: Product(id={product.id})")
        return from_document(stored)

    async def _next_id(self) -> int:
        async with store_call("documents.next_id", self._timeout):
            rows = await self._client.query_items("SELECT VALUE MAX(c.product_id) FROM c")
        current = rows[0] if rows and rows[0] is not None else 0
        return int(current) + 1

    async def find_by_id(self, product_id: int) -> Product | None:
        return await self._find_one(product_id, active_only=False)

    async def find_active_by_id(self, product_id: int) -> Product | None:
        return await self._find_one(product_id, active_only=True)

    async def _find_one(self, product_id: int, *, active_only: bool) -> Product | None:
        query = "SELECT * FROM c WHERE c.product_id = @id"
        if active_only:
            query += " AND c.active = true"
        async with store_call("documents.find_by_id", self._timeout):
            rows = await self._client.query_items(
                query, parameters=[{"name": "@id", "value": product_id}],
            )
        return from_document(rows[0]) if rows else None

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
        """Return up to ``limit`` matching documents strictly past ``resume_key``."""
        query, parameters = build_window_query(
            resume_key, criteria, limit, descending=descending,
        )
        async with store_call("documents.fetch_window", self._timeout):
            rows = await self._client.query_items(query, parameters=parameters)

        self._lazy.debug(
            lambda: (
                f"cosmos.fetch_window: Product(after={resume_key}, limit={limit}, "
                f"desc={descending}) -> {len(rows)} documents"
            ),
        )
        return [from_document(row) for row in rows]

    async def deactivate_product(self, product_id: int) -> Product:
        existing = await self.find_by_id(product_id)
        if existing is None:
            raise NotFoundException(
                detail=f"Product not found with id: {product_id}",
                extra={"product_id": product_id},
            )

        if not existing.active:
            self.logger.info(
                "Product already inactive",
                extra={"product_id": product_id, "operation": "cosmos.deactivate"},
            )
            return existing

        deactivated = existing.deactivated()
        async with store_call("documents.deactivate", self._timeout):
            await self._client.upsert_item(to_document(deactivated))

        self.logger.info(
            "Product deactivated",
            extra={"product_id": product_id, "operation": "cosmos.deactivate"},
        )
        return deactivated


def build_window_query(
    resume_key: int | None,
    criteria: NormalizedFilter,
    limit: int,
    *,
    descending: bool = False,
) -> tuple[str, list[dict[str, Any]]]:
    """Build the parameterized Cosmos SQL for one id-ordered window.

    Example:
        build_window_query(5, NormalizedFilter(name="lamp"), 11)
        # ("SELECT TOP @limit * FROM c WHERE c.active = @active AND c.product_id > @after
        #   AND CONTAINS(LOWER(c.name), @name) ORDER BY c.product_id ASC", [...])
    """
    clauses = ["c.active = @active"]
    parameters: list[dict[str, Any]] = [
        {"name": "@limit", "value": limit},
        {"name": "@active", "value": criteria.active},
    ]

    if resume_key is not None:
        clauses.append(f"c.product_id {'<' if descending else '>'} @after")
        parameters.append({"name": "@after", "value": resume_key})
    if criteria.category is not None:
        clauses.append("c.category = @category")
        parameters.append({"name": "@category", "value": criteria.category.value})
    if criteria.name is not None:
        clauses.append("CONTAINS(LOWER(c.name), @name)")
        parameters.append({"name": "@name", "value": criteria.name})

    direction = "DESC" if descending else "ASC"
    query = (
        f"SELECT TOP @limit * FROM c WHERE {' AND '.join(clauses)} "
        f"ORDER BY c.product_id {direction}"
    )
    return query, parameters


__all__ = ["CosmosProductStore", "build_window_query", "from_document", "to_document"]
