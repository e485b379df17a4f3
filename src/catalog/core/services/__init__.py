from .catalog import (
    CatalogQueryService,
    CategoryService,
    ProductMutationService,
    VoucherService,
)
from .database.db_manage import DbManageService
from .database.db_session import DbSessionService
from .image.image_normalizer import ImageNormalizerService

__all__ = [
    "CatalogQueryService",
    "CategoryService",
    "DbManageService",
    "DbSessionService",
    "ImageNormalizerService",
    "ProductMutationService",
    "VoucherService",
]
