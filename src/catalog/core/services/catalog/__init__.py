from .catalog_query import CatalogQueryService
from .category_service import CategoryService
from .product_mutation import ProductMutationService
from .variant_reconciler import VariantPlan, VariantUpdate, reconcile
from .voucher_service import VoucherService

__all__ = [
    "CatalogQueryService",
    "CategoryService",
    "ProductMutationService",
    "VariantPlan",
    "VariantUpdate",
    "VoucherService",
    "reconcile",
]
