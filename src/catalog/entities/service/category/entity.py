"""Entity: Category."""

from typing import Any

from pydantic import Field

from src.catalog.entities.core._base import Entity


class Category(Entity):
    """Category entity as exposed by listings.

    The stored image is never part of the entity; it is only reachable through
    the dedicated image fetch.
    """

    name: str = Field(description="Category name")

    def __eq__(self, other: Any) -> bool:
        """Compare categories by business attributes, ignoring timestamps."""
        if not isinstance(other, Category):
            return False

        return self.id == other.id and self.name == other.name

    def __hash__(self) -> int:
        """Hash based on business attributes, ignoring timestamps."""
        return hash((self.id, self.name))
