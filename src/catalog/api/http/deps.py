"""FastAPI dependency implementations."""

from fastapi import Request

from src.catalog.api.http.app_data import ApplicationDependencies
from src.catalog.core.services import (
    CatalogQueryService,
    CategoryService,
    DbSessionService,
    ImageNormalizerService,
    ProductMutationService,
    VoucherService,
)


def get_app_dependencies(request: Request) -> ApplicationDependencies:
    return request.app.state.app_dependencies


def get_database_service(request: Request) -> DbSessionService:
    """Get the database service instance."""
    return get_app_dependencies(request).database_service


def get_image_normalizer(request: Request) -> ImageNormalizerService:
    return get_app_dependencies(request).image_normalizer


def get_catalog_query_service(request: Request) -> CatalogQueryService:
    """Get the read-side catalog service."""
    return get_app_dependencies(request).catalog_query_service


def get_product_mutation_service(request: Request) -> ProductMutationService:
    """Get the product write coordinator."""
    return get_app_dependencies(request).product_mutation_service


def get_category_service(request: Request) -> CategoryService:
    return get_app_dependencies(request).category_service


def get_voucher_service(request: Request) -> VoucherService:
    return get_app_dependencies(request).voucher_service
