"""Product repository.

Every method runs on the session handed to the constructor, so a mutation
that builds all of its repositories from one session keeps every statement in
the same transaction.
"""

from collections.abc import Sequence
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import ColumnElement, delete, func, insert, update
from sqlalchemy.orm import defer, selectinload
from sqlmodel import Session, select

from src.catalog.entities.core.links import ProductCategoryLink
from src.catalog.entities.service.category.entity import Category
from src.catalog.entities.service.category.table import CategoryTable
from src.catalog.entities.service.product.entity import (
    Product,
    ProductDetail,
    ProductVariant,
)
from src.catalog.entities.service.product.table import ProductTable
from src.catalog.entities.service.variant.entity import Variant
from src.catalog.entities.service.variant.table import VariantTable
from src.catalog.entities.service.voucher.entity import Voucher

# Product columns a caller may write; everything else on an input is ignored.
WRITABLE_FIELDS = ("name", "description", "image", "is_active")


def _to_detail(row: ProductTable, include_vouchers: bool = True) -> ProductDetail:
    product = Product.model_validate(row, from_attributes=True)
    variants = sorted(row.variants, key=lambda variant: (variant.created_at, variant.id))
    return ProductDetail(
        **product.model_dump(),
        categories=[
            Category.model_validate(category, from_attributes=True)
            for category in sorted(row.categories, key=lambda category: category.name)
        ],
        variants=[
            ProductVariant(
                **Variant.model_validate(variant, from_attributes=True).model_dump(),
                product=product,
            )
            for variant in variants
        ],
        vouchers=[
            Voucher.model_validate(voucher, from_attributes=True)
            for voucher in row.vouchers
        ]
        if include_vouchers
        else [],
    )


class ProductRepository:
    """Data-access layer for products and their relationship links."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def _detail_statement(self, include_vouchers: bool = True):
        options = [
            defer(ProductTable.image),
            selectinload(ProductTable.categories).defer(CategoryTable.image),
            selectinload(ProductTable.variants),
        ]
        if include_vouchers:
            options.append(selectinload(ProductTable.vouchers))
        return (
            select(ProductTable)
            .options(*options)
            .execution_options(populate_existing=True)
        )

    def create(self, values: dict[str, Any]) -> Product:
        row = ProductTable(**{key: values[key] for key in WRITABLE_FIELDS if key in values})
        self._session.add(row)
        self._session.flush()
        return Product.model_validate(row, from_attributes=True)

    def get(self, product_id: str) -> Product | None:
        statement = (
            select(ProductTable)
            .where(ProductTable.id == product_id)
            .options(defer(ProductTable.image))
        )
        row = self._session.exec(statement).first()
        if row is None:
            return None
        return Product.model_validate(row, from_attributes=True)

    def get_image(self, product_id: str) -> bytes | None:
        statement = select(ProductTable.image).where(ProductTable.id == product_id)
        return self._session.exec(statement).first()

    def update_fields(self, product_id: str, values: dict[str, Any]) -> int:
        """Update the writable columns of one product; returns the affected row count.

        ``updated_at`` is always bumped, so a payload that only touches
        relationships still reports whether the product exists.
        """
        changes = {key: values[key] for key in WRITABLE_FIELDS if key in values}
        changes["updated_at"] = datetime.now(UTC)
        statement = update(ProductTable).where(ProductTable.id == product_id).values(**changes)
        return self._session.exec(statement).rowcount

    def delete(self, product_id: str) -> int:
        """Delete one product; variants and links go with it through ON DELETE CASCADE."""
        statement = delete(ProductTable).where(ProductTable.id == product_id)
        return self._session.exec(statement).rowcount

    def set_categories(self, product_id: str, category_ids: Sequence[str]) -> None:
        """Replace the product's whole category set with ``category_ids``."""
        self._session.exec(
            delete(ProductCategoryLink).where(ProductCategoryLink.product_id == product_id)
        )
        if category_ids:
            self._session.exec(
                insert(ProductCategoryLink),
                params=[
                    {"product_id": product_id, "category_id": category_id}
                    for category_id in dict.fromkeys(category_ids)
                ],
            )

    def set_variants(self, product_id: str, variant_ids: Sequence[str]) -> None:
        """Make ``variant_ids`` the product's complete variant set.

        A variant cannot exist without an owner, so the product's variants that
        are not in the new set are deleted rather than detached.
        """
        self._session.exec(
            delete(VariantTable).where(
                VariantTable.product_id == product_id,
                VariantTable.id.not_in(list(variant_ids)),
            )
        )
        self.add_variants(product_id, variant_ids)

    def add_variants(self, product_id: str, variant_ids: Sequence[str]) -> None:
        """Attach ``variant_ids`` to the product without touching its other variants."""
        if not variant_ids:
            return
        self._session.exec(
            update(VariantTable)
            .where(VariantTable.id.in_(list(variant_ids)))
            .values(product_id=product_id)
        )

    def load_detail(self, product_id: str, include_vouchers: bool = True) -> ProductDetail | None:
        statement = self._detail_statement(include_vouchers).where(ProductTable.id == product_id)
        row = self._session.exec(statement).first()
        if row is None:
            return None
        return _to_detail(row, include_vouchers)

    def search(
        self,
        where: Sequence[ColumnElement[bool]],
        order_by: Sequence[ColumnElement[Any]],
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[ProductDetail]:
        statement = self._detail_statement().where(*where).order_by(*order_by)
        if limit is not None:
            statement = statement.limit(limit)
        if offset:
            statement = statement.offset(offset)
        return [_to_detail(row) for row in self._session.exec(statement).all()]

    def count(self, where: Sequence[ColumnElement[bool]]) -> int:
        statement = select(func.count()).select_from(ProductTable).where(*where)
        return self._session.exec(statement).one()
