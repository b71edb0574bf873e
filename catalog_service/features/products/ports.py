"""Store capability set shared by the relational and document adapters."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from catalog_service.core.pagination import PaginatedResult, PaginationQuery
    from catalog_service.features.products.domain import Product
    from catalog_service.features.products.filters import NormalizedFilter


@runtime_checkable
class ProductStore(Protocol):
    """Persistence port for products.

    Implementations assign ids on first save, never delete rows, and treat
    deactivating an already inactive product as a successful no-op.
    """

    async def save(self, product: Product) -> Product:
        """Insert (id None) or fully overwrite (id set) a product."""
        ...

    async def find_by_id(self, product_id: int) -> Product | None:
        """Return the product regardless of its active flag."""
        ...

    async def find_active_by_id(self, product_id: int) -> Product | None:
        """Return the product only when it is active."""
        ...

    async def find_active_products(
        self, query: PaginationQuery, criteria: NormalizedFilter,
    ) -> PaginatedResult[Product]:
        """Return one cursor page of products matching ``criteria``."""
        ...

    async def deactivate_product(self, product_id: int) -> Product:
        """Flip ``active`` to False and return the resulting product.

        Raises:
            NotFoundException: If no product has ``product_id``.
        """
        ...
