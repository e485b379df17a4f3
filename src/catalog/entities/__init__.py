"""Entities module with hybrid entity-centric structure.

This module organizes entities by business concept rather than technical layer.
Each entity has its own package containing:
- entity.py: Domain model handed to services and routers
- table.py: Database persistence model
- repository.py: Data access layer

Importing this package registers every table with the SQLModel metadata.
"""

from .service.category import Category, CategoryRepository, CategoryTable
from .service.product import (
    Product,
    ProductCategoryLink,
    ProductDetail,
    ProductRepository,
    ProductTable,
    ProductVariant,
    ProductVoucherLink,
)
from .service.variant import Variant, VariantRepository, VariantTable
from .service.voucher import Voucher, VoucherRepository, VoucherTable

__all__ = [
    "Category",
    "CategoryRepository",
    "CategoryTable",
    "Product",
    "ProductCategoryLink",
    "ProductDetail",
    "ProductRepository",
    "ProductTable",
    "ProductVariant",
    "ProductVoucherLink",
    "Variant",
    "VariantRepository",
    "VariantTable",
    "Voucher",
    "VoucherRepository",
    "VoucherTable",
]
