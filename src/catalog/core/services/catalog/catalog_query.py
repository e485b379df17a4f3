"""Read side of the catalog: filtered, sorted and paginated product listings."""

from typing import Any

from loguru import logger
from sqlalchemy import ColumnElement, String, func
from sqlmodel import col, select

from src.catalog.core.errors import NotFoundError
from src.catalog.core.models.catalog import (
    PageInfo,
    Pagination,
    ProductFilter,
    ProductPage,
    ProductSort,
    SortDirection,
    SortField,
)
from src.catalog.core.services.database.db_session import DbSessionService
from src.catalog.entities.core.links import ProductCategoryLink
from src.catalog.entities.service.category.repository import CategoryRepository
from src.catalog.entities.service.product.repository import ProductRepository
from src.catalog.entities.service.product.table import ProductTable
from src.catalog.entities.service.variant.table import VariantTable
from src.catalog.runtime.config.config_data import CatalogConfig
from src.catalog.runtime.context import get_config

SORT_COLUMNS = {
    SortField.NAME: ProductTable.name,
    SortField.DESCRIPTION: ProductTable.description,
    SortField.IS_ACTIVE: ProductTable.is_active,
    SortField.CREATED_AT: ProductTable.created_at,
    SortField.UPDATED_AT: ProductTable.updated_at,
}


def max_variant_price() -> ColumnElement[Any]:
    """Correlated subquery: the highest price among the product's variants, NULL if none."""
    return (
        select(func.max(VariantTable.price))
        .where(VariantTable.product_id == ProductTable.id)
        .correlate(ProductTable)
        .scalar_subquery()
    )


def build_filters(
    product_filter: ProductFilter, category_id: str | None = None
) -> list[ColumnElement[bool]]:
    clauses: list[ColumnElement[bool]] = []
    if product_filter.name:
        clauses.append(
            func.lower(ProductTable.name, type_=String).contains(
                product_filter.name.lower(), autoescape=True
            )
        )
    if category_id is not None:
        linked = select(ProductCategoryLink.product_id).where(
            ProductCategoryLink.category_id == category_id
        )
        clauses.append(col(ProductTable.id).in_(linked))
    return clauses


def build_ordering(sort: ProductSort) -> list[ColumnElement[Any]]:
    """Translate a validated sort into ORDER BY terms.

    Products without variants have no price; they are always ordered last,
    whichever direction is requested. Product id breaks every tie.
    """
    descending = sort.direction is SortDirection.DESC
    if sort.field is SortField.PRICE:
        price = max_variant_price()
        key = price.desc() if descending else price.asc()
        ordering = [price.is_(None).asc(), key]
    else:
        column = SORT_COLUMNS[sort.field]
        ordering = [column.desc() if descending else column.asc()]
    ordering.append(col(ProductTable.id).asc())
    return ordering


class CatalogQueryService:
    """Lists products and serves stored product images. Never writes."""

    def __init__(self, database_service: DbSessionService, config: CatalogConfig | None = None):
        self._database = database_service
        self._config = config or get_config().catalog

    def default_sort(self) -> ProductSort:
        return ProductSort(
            field=SortField.parse(self._config.default_sort_field),
            direction=SortDirection.parse(self._config.default_sort_direction),
        )

    def default_pagination(self) -> Pagination:
        return Pagination(per_page=self._config.default_per_page)

    def list_products(
        self,
        product_filter: ProductFilter | None = None,
        sort: ProductSort | None = None,
        pagination: Pagination | None = None,
        category_id: str | None = None,
    ) -> ProductPage:
        product_filter = product_filter or ProductFilter()
        sort = sort or self.default_sort()
        pagination = pagination or self.default_pagination()

        logger.debug(
            "Listing products name={} category={} sort={} {} page={} per_page={} paginated={}",
            product_filter.name,
            category_id,
            sort.field.value,
            sort.direction.value,
            pagination.page,
            pagination.per_page,
            pagination.enabled,
        )

        with self._database.transaction() as session:
            if category_id is not None and not CategoryRepository(session).exists(category_id):
                raise NotFoundError("category not found")

            products = ProductRepository(session)
            where = build_filters(product_filter, category_id)
            items = products.search(
                where,
                build_ordering(sort),
                limit=pagination.per_page if pagination.enabled else None,
                offset=pagination.offset if pagination.enabled else None,
            )
            total = products.count(where)

        page_info = PageInfo.build(total, pagination) if pagination.enabled else None
        return ProductPage(items=items, total=total, page_info=page_info)

    def get_product_image(self, product_id: str) -> bytes:
        with self._database.transaction() as session:
            image = ProductRepository(session).get_image(product_id)
        if not image:
            raise NotFoundError("product image not found")
        return image
