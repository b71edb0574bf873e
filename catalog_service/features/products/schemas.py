"""Pydantic schemas for the products API."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, field_validator
from pydantic.alias_generators import to_camel

from catalog_service.features.products.domain import ProductCategory

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100
PRICE_MIN = Decimal("0.01")
PRICE_INTEGER_DIGITS = 8
PRICE_FRACTION_DIGITS = 2

# Prices travel as JSON numbers
JsonPrice = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class ProductRequest(BaseModel):
    """Payload used when creating or fully replacing a product.

    Every field is checked with a field-specific message so the 400 response
    can report one message per field.
    """

    name: str | None = Field(
        default=None,
        validate_default=True,
        description="Product name, 2-100 characters",
        examples=["Wireless Mouse"],
    )
    price: Decimal | None = Field(
        default=None,
        validate_default=True,
        description="Unit price, at least 0.01, at most 8 integer and 2 decimal digits",
        examples=["24.99"],
    )
    category: ProductCategory | None = Field(
        default=None,
        validate_default=True,
        description="One of ELECTRONICS, CLOTHING, BOOKS (case-insensitive)",
    )
    active: bool = Field(default=True, description="Defaults to true when omitted")

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str | None) -> str:
        if value is None or not value.strip():
            msg = "Product name is required"
            raise ValueError(msg)
        value = value.strip()
        if not NAME_MIN_LENGTH <= len(value) <= NAME_MAX_LENGTH:
            msg = (
                f"Product name must be between {NAME_MIN_LENGTH} "
                f"and {NAME_MAX_LENGTH} characters"
            )
            raise ValueError(msg)
        return value

    @field_validator("price", mode="before")
    @classmethod
    def _parse_price(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        if isinstance(value, bool):
            msg = "Price must be a number"
            raise ValueError(msg)
        if isinstance(value, float):
            return Decimal(repr(value))
        if isinstance(value, str):
            try:
                return Decimal(value.strip())
            except InvalidOperation:
                msg = "Price must be a number"
                raise ValueError(msg) from None
        return value

    @field_validator("price")
    @classmethod
    def _check_price(cls, value: Decimal | None) -> Decimal:
        if value is None:
            msg = "Price is required"
            raise ValueError(msg)
        if not value.is_finite():
            msg = "Price must be a number"
            raise ValueError(msg)
        if value < PRICE_MIN:
            msg = "Price must be greater than 0"
            raise ValueError(msg)

        _, digits, exponent = value.as_tuple()
        assert isinstance(exponent, int)
        fraction_digits = max(0, -exponent)
        integer_digits = max(0, len(digits) + exponent)
        if fraction_digits > PRICE_FRACTION_DIGITS or integer_digits > PRICE_INTEGER_DIGITS:
            msg = (
                f"Price must have at most {PRICE_INTEGER_DIGITS} integer digits "
                f"and {PRICE_FRACTION_DIGITS} decimal places"
            )
            raise ValueError(msg)
        return value

    @field_validator("category", mode="before")
    @classmethod
    def _parse_category(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        if isinstance(value, str):
            return ProductCategory.parse(value)
        return value

    @field_validator("category")
    @classmethod
    def _check_category(cls, value: ProductCategory | None) -> ProductCategory:
        if value is None:
            msg = "Category is required"
            raise ValueError(msg)
        return value

    @field_validator("active", mode="before")
    @classmethod
    def _default_active(cls, value: Any) -> Any:
        return True if value is None else value


class ProductResponse(BaseModel):
    """Representation returned from the API."""

    id: int
    name: str
    price: JsonPrice
    category: ProductCategory
    active: bool

    model_config = ConfigDict(from_attributes=True)


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PageInfo(_CamelModel):
    """Pagination metadata for cursor-based navigation."""

    size: int = Field(description="Number of items in current page")
    limit: int = Field(description="Maximum items per page")
    has_next: bool = Field(description="Whether there is a next page")
    has_previous: bool = Field(description="Whether there is a previous page")
    next_cursor: str | None = Field(default=None, description="Cursor for next page navigation")
    previous_cursor: str | None = Field(
        default=None, description="Cursor for previous page navigation",
    )


class ProductPageResponse(_CamelModel):
    """Paginated response for products using cursor-based pagination."""

    content: list[ProductResponse] = Field(default_factory=list)
    next_cursor: str | None = Field(default=None, description="Cursor for the next page")
    previous_cursor: str | None = Field(default=None, description="Cursor for the previous page")
    has_next: bool = Field(description="Whether there are more items after this page")
    has_previous: bool = Field(description="Whether there are items before this page")
    size: int = Field(description="Number of items in this page")
    limit: int = Field(description="Maximum number of items per page")
    page_info: PageInfo


__all__ = [
    "PageInfo",
    "ProductPageResponse",
    "ProductRequest",
    "ProductResponse",
]
