"""Entity: Product."""

from typing import Any

from pydantic import Field

from src.catalog.entities.core._base import Entity
from src.catalog.entities.service.category.entity import Category
from src.catalog.entities.service.variant.entity import Variant
from src.catalog.entities.service.voucher.entity import Voucher


class Product(Entity):
    """Product entity without its image payload.

    This is the reduced form used both for listings and for the back-reference
    a variant carries to its owning product.
    """

    name: str = Field(description="Product name")
    description: str | None = Field(default=None, description="Product description")
    is_active: bool = Field(default=True, description="Whether the product is sellable")

    def __eq__(self, other: Any) -> bool:
        """Compare products by business attributes, ignoring timestamps."""
        if not isinstance(other, Product):
            return False

        return (
            self.id == other.id
            and self.name == other.name
            and self.description == other.description
            and self.is_active == other.is_active
        )

    def __hash__(self) -> int:
        """Hash based on business attributes, ignoring timestamps."""
        return hash((
            self.id,
            self.name,
            self.description,
            self.is_active,
        ))


class ProductVariant(Variant):
    """Variant together with a reduced reference to its owning product."""

    product: Product | None = Field(default=None, description="Owning product, image excluded")


class ProductDetail(Product):
    """Product with its categories, variants and vouchers."""

    categories: list[Category] = Field(default_factory=list)
    variants: list[ProductVariant] = Field(default_factory=list)
    vouchers: list[Voucher] = Field(default_factory=list)
