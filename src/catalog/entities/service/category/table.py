"""Category database table model."""

from typing import TYPE_CHECKING

from sqlalchemy import Column, LargeBinary
from sqlmodel import Field, Relationship

from src.catalog.entities.core._base import EntityTable
from src.catalog.entities.core.links import ProductCategoryLink

if TYPE_CHECKING:
    from src.catalog.entities.service.product.table import ProductTable


class CategoryTable(EntityTable, table=True):
    """Database persistence model for categories."""

    __tablename__ = "categories"

    name: str = Field(index=True)
    image: bytes | None = Field(default=None, sa_column=Column(LargeBinary, nullable=True))

    products: list["ProductTable"] = Relationship(
        back_populates="categories", link_model=ProductCategoryLink
    )
