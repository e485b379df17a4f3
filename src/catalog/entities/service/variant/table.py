"""Variant database table model."""

from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from sqlmodel import Field, Relationship

from src.catalog.entities.core._base import EntityTable

if TYPE_CHECKING:
    from src.catalog.entities.service.product.table import ProductTable


class VariantTable(EntityTable, table=True):
    """Database persistence model for product variants (SKUs).

    ``product_id`` is nullable only between a bulk insert and the link step of
    the same transaction.
    """

    __tablename__ = "variants"

    name: str
    price: Decimal = Field(default=Decimal("0"), max_digits=12, decimal_places=2)
    stock: int = Field(default=0)
    product_id: str | None = Field(
        default=None, foreign_key="products.id", index=True, ondelete="CASCADE"
    )

    product: Optional["ProductTable"] = Relationship(back_populates="variants")
