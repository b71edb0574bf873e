"""Product change events."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, ClassVar

from pydantic import Field

from catalog_service.core.events import DomainEvent
from catalog_service.features.products.domain import Product, ProductCategory


class ProductChangedEvent(DomainEvent):
    """Published after a product is created, updated or deactivated.

    Carries the full product state; consumers treat it as an upsert.

    Example:
        event = ProductChangedEvent.from_product(saved)
        publisher.publish(event)
    """

    event_type: ClassVar[str] = "product.changed"
    event_version: ClassVar[int] = 1

    product_id: int = Field(description="Product identifier")
    name: str
    price: Decimal
    category: ProductCategory
    active: bool = True

    @classmethod
    def from_product(cls, product: Product) -> ProductChangedEvent:
        if product.id is None:
            msg = "Cannot publish a change for an unsaved product"
            raise ValueError(msg)
        return cls(
            product_id=product.id,
            name=product.name,
            price=product.price,
            category=product.category,
            active=product.active,
        )

    def to_product(self) -> Product:
        return Product(
            id=self.product_id,
            name=self.name,
            price=self.price,
            category=self.category,
            active=self.active,
        )

    @property
    def message_key(self) -> str:
        return str(self.product_id)

    def headers(self) -> dict[str, Any]:
        return {**super().headers(), "x-product-id": self.message_key}


__all__ = ["ProductChangedEvent"]
