"""Variant repository."""

from collections.abc import Sequence
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import delete, update
from sqlmodel import Session, select

from src.catalog.entities.service.variant.entity import Variant
from src.catalog.entities.service.variant.table import VariantTable

# Variant columns a caller may write; everything else on an input is ignored.
WRITABLE_FIELDS = ("name", "price", "stock")


def writable_values(values: dict[str, Any]) -> dict[str, Any]:
    return {key: values[key] for key in WRITABLE_FIELDS if key in values}


class VariantRepository:
    """Data-access layer for variants."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def list_by_product(self, product_id: str) -> list[Variant]:
        statement = (
            select(VariantTable)
            .where(VariantTable.product_id == product_id)
            .order_by(VariantTable.created_at, VariantTable.id)
        )
        return [
            Variant.model_validate(row, from_attributes=True)
            for row in self._session.exec(statement).all()
        ]

    def bulk_create(self, values: Sequence[dict[str, Any]]) -> list[Variant]:
        """Insert one unowned variant per entry; only name, price and stock are used."""
        rows = [VariantTable(**writable_values(entry)) for entry in values]
        self._session.add_all(rows)
        self._session.flush()
        return [Variant.model_validate(row, from_attributes=True) for row in rows]

    def update(self, variant_id: str, product_id: str, values: dict[str, Any]) -> int:
        """Update a variant owned by ``product_id``; returns the affected row count.

        Only the given columns change. ``updated_at`` is always bumped, so an
        empty change set still reports whether the variant matched.
        """
        changes = writable_values(values)
        changes["updated_at"] = datetime.now(UTC)
        statement = (
            update(VariantTable)
            .where(VariantTable.id == variant_id, VariantTable.product_id == product_id)
            .values(**changes)
        )
        return self._session.exec(statement).rowcount

    def delete(self, variant_id: str) -> int:
        statement = delete(VariantTable).where(VariantTable.id == variant_id)
        return self._session.exec(statement).rowcount
