"""Catalog service models."""

from .catalog import (
    FieldPresence,
    PageInfo,
    Pagination,
    ProductCreateInput,
    ProductEditInput,
    ProductFilter,
    ProductPage,
    ProductSort,
    SortDirection,
    SortField,
    VariantInput,
)

__all__ = [
    "FieldPresence",
    "PageInfo",
    "Pagination",
    "ProductCreateInput",
    "ProductEditInput",
    "ProductFilter",
    "ProductPage",
    "ProductSort",
    "SortDirection",
    "SortField",
    "VariantInput",
]
