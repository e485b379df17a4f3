"""Entity: Variant."""

from decimal import Decimal
from typing import Any

from pydantic import Field

from src.catalog.entities.core._base import Entity


class Variant(Entity):
    """A purchasable SKU belonging to exactly one product."""

    name: str = Field(description="Variant name, e.g. size or color")
    price: Decimal = Field(ge=0, description="Unit price")
    stock: int = Field(ge=0, description="Units in stock")
    product_id: str | None = Field(default=None, description="Owning product")

    def __eq__(self, other: Any) -> bool:
        """Compare variants by business attributes, ignoring timestamps."""
        if not isinstance(other, Variant):
            return False

        return (
            self.id == other.id
            and self.name == other.name
            and self.price == other.price
            and self.stock == other.stock
            and self.product_id == other.product_id
        )

    def __hash__(self) -> int:
        """Hash based on business attributes, ignoring timestamps."""
        return hash((
            self.id,
            self.name,
            self.price,
            self.stock,
            self.product_id,
        ))
