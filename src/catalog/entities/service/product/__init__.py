"""Entity package: Product."""

from src.catalog.entities.core.links import ProductCategoryLink, ProductVoucherLink

from .entity import Product, ProductDetail, ProductVariant
from .repository import ProductRepository
from .table import ProductTable

__all__ = [
    "Product",
    "ProductDetail",
    "ProductVariant",
    "ProductRepository",
    "ProductTable",
    "ProductCategoryLink",
    "ProductVoucherLink",
]
