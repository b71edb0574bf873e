"""Product filter predicate.

Turns the raw optional ``category``/``name``/``active`` request inputs into a
normalized predicate the store adapters translate into their query language.
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, field_validator

from catalog_service.core.exceptions import InvalidArgumentException
from catalog_service.features.products.domain import ProductCategory


class ProductFilter(BaseModel):
    """Raw listing filter as received from a client.

    ``active`` defaults to True when omitted. Blank ``category``/``name`` are
    indistinguishable from absent ones through the ``*_for_query`` accessors.
    """

    category: str | None = None
    name: str | None = None
    active: bool = True

    model_config = ConfigDict(frozen=True)

    @field_validator("active", mode="before")
    @classmethod
    def _default_active(cls, value: bool | None) -> bool:
        return True if value is None else value

    def category_for_query(self) -> str | None:
        return _blank_to_none(self.category)

    def name_for_query(self) -> str | None:
        return _blank_to_none(self.name)


@dataclass(frozen=True, slots=True)
class NormalizedFilter:
    """Store-ready predicate.

    Attributes:
        active: Required value of the active flag.
        category: Required category, or None for any.
        name: Lower-cased substring the name must contain, or None for any.
    """

    active: bool = True
    category: ProductCategory | None = None
    name: str | None = None

    def matches(self, category: ProductCategory, name: str, active: bool) -> bool:
        """Evaluate the predicate against one product's fields."""
        if active is not self.active:
            return False
        if self.category is not None and category is not self.category:
            return False
        return self.name is None or self.name in name.lower()


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def normalize_filter(
    category: str | None = None,
    name: str | None = None,
    active: bool | None = None,
) -> NormalizedFilter:
    """Normalize raw filter inputs.

    Args:
        category: Category symbolic name, any case; blank means any category.
        name: Name substring, matched case-insensitively; blank means any name.
        active: Required active flag; None means True.

    Returns:
        The normalized predicate.

    Raises:
        InvalidArgumentException: If ``category`` names no known category.

    Example:
        normalize_filter(" books ", "  ", None)
        # NormalizedFilter(active=True, category=ProductCategory.BOOKS, name=None)
    """
    raw = ProductFilter(category=category, name=name, active=active)

    parsed_category: ProductCategory | None = None
    category_text = raw.category_for_query()
    if category_text is not None:
        try:
            parsed_category = ProductCategory.parse(category_text)
        except ValueError as exc:
            raise InvalidArgumentException(
                detail=str(exc),
                extra={"field": "category", "value": category_text},
            ) from exc

    name_text = raw.name_for_query()

    return NormalizedFilter(
        active=raw.active,
        category=parsed_category,
        name=name_text.lower() if name_text is not None else None,
    )
