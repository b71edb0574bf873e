"""Product domain model."""

from __future__ import annotations

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ProductCategory(str, Enum):
    """Catalog categories.

    Values are the symbolic names used on the wire and in both stores;
    ``display_name`` is the human label shown in the web UI.
    """

    ELECTRONICS = "ELECTRONICS"
    CLOTHING = "CLOTHING"
    BOOKS = "BOOKS"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @classmethod
    def parse(cls, value: str) -> ProductCategory:
        """Look up a category by symbolic name, ignoring case and surrounding blanks.

        Raises:
            ValueError: If ``value`` names no category.
        """
        try:
            return cls[value.strip().upper()]
        except KeyError:
            msg = f"Invalid category: {value}"
            raise ValueError(msg) from None


class Product(BaseModel):
    """Immutable product record.

    ``id`` is None only before the product is first persisted. A product is
    never physically deleted; deactivation flips ``active`` to False.
    """

    id: int | None = None
    name: str
    price: Decimal
    category: ProductCategory
    active: bool = Field(default=True)

    model_config = ConfigDict(frozen=True)

    def with_id(self, product_id: int | None) -> Product:
        return self.model_copy(update={"id": product_id})

    def deactivated(self) -> Product:
        return self.model_copy(update={"active": False})
