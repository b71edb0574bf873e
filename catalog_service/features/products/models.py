"""Relational product entity."""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import BigInteger, Boolean, Enum, Index, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from catalog_service.core.database import Base
from catalog_service.features.products.domain import ProductCategory


class ProductEntity(Base):
    """Mutable row mirror of :class:`Product`, used only inside the relational adapter."""

    __tablename__ = "products"
    __table_args__ = (
        Index("ix_products_active_id", "active", "id"),
        Index("ix_products_category", "category"),
    )

    # SQLite only autoincrements INTEGER PRIMARY KEY columns
    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    category: Mapped[ProductCategory] = mapped_column(
        Enum(ProductCategory, native_enum=False, length=20, validate_strings=True),
        nullable=False,
    )
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    def __repr__(self) -> str:
        return f"<ProductEntity id={self.id} name={self.name!r} active={self.active}>"
