"""Product database table model."""

from typing import TYPE_CHECKING

from sqlalchemy import Column, LargeBinary
from sqlmodel import Field, Relationship

from src.catalog.entities.core._base import EntityTable
from src.catalog.entities.core.links import ProductCategoryLink, ProductVoucherLink

if TYPE_CHECKING:
    from src.catalog.entities.service.category.table import CategoryTable
    from src.catalog.entities.service.variant.table import VariantTable
    from src.catalog.entities.service.voucher.table import VoucherTable


class ProductTable(EntityTable, table=True):
    """Database persistence model for products.

    The image column holds normalized bytes and is never loaded by listing
    queries; readers defer it explicitly.
    """

    __tablename__ = "products"

    name: str = Field(index=True)
    description: str | None = None
    image: bytes | None = Field(default=None, sa_column=Column(LargeBinary, nullable=True))
    is_active: bool = Field(default=True)

    categories: list["CategoryTable"] = Relationship(
        back_populates="products", link_model=ProductCategoryLink
    )
    variants: list["VariantTable"] = Relationship(
        back_populates="product", sa_relationship_kwargs={"passive_deletes": True}
    )
    vouchers: list["VoucherTable"] = Relationship(
        back_populates="products", link_model=ProductVoucherLink
    )
