"""Service fixtures for testing."""

from collections.abc import Callable, Generator
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from src.catalog.api.http.app_data import ApplicationDependencies
from src.catalog.core.models import ProductCreateInput, VariantInput
from src.catalog.core.services import (
    CatalogQueryService,
    CategoryService,
    DbSessionService,
    ProductMutationService,
    VoucherService,
)
from src.catalog.entities.service.category.entity import Category
from src.catalog.entities.service.product.entity import ProductDetail
from src.catalog.runtime.config.config_data import CatalogConfig

from .dummies import StubImageNormalizer

__all__ = [
    "app_dependencies",
    "catalog_query_service",
    "category_service",
    "client",
    "image_normalizer",
    "make_category",
    "make_product",
    "product_mutation_service",
    "voucher_service",
]


@pytest.fixture
def image_normalizer() -> StubImageNormalizer:
    return StubImageNormalizer()


@pytest.fixture
def catalog_query_service(database_service: DbSessionService) -> CatalogQueryService:
    return CatalogQueryService(database_service, CatalogConfig())


@pytest.fixture
def product_mutation_service(
    database_service: DbSessionService, image_normalizer: StubImageNormalizer
) -> ProductMutationService:
    return ProductMutationService(database_service, image_normalizer)


@pytest.fixture
def category_service(
    database_service: DbSessionService, image_normalizer: StubImageNormalizer
) -> CategoryService:
    return CategoryService(database_service, image_normalizer)


@pytest.fixture
def voucher_service(database_service: DbSessionService) -> VoucherService:
    return VoucherService(database_service)


@pytest.fixture
def make_category(category_service: CategoryService) -> Callable[..., Category]:
    def _make(name: str = "Apparel", image: bytes | None = None) -> Category:
        return category_service.create_category(name, image)

    return _make


@pytest.fixture
def make_product(
    product_mutation_service: ProductMutationService,
) -> Callable[..., ProductDetail]:
    """Create a product; ``prices`` become variants named v0, v1, ..."""

    def _make(
        name: str = "Widget",
        prices: tuple[str, ...] = (),
        category_ids: list[str] | None = None,
        **fields,
    ) -> ProductDetail:
        variants = [
            VariantInput(name=f"v{index}", price=Decimal(price), stock=1)
            for index, price in enumerate(prices)
        ]
        return product_mutation_service.create_product(
            ProductCreateInput(
                name=name,
                category_ids=category_ids,
                variants=variants or None,
                **fields,
            )
        )

    return _make


@pytest.fixture
def app_dependencies(
    database_service: DbSessionService, image_normalizer: StubImageNormalizer
) -> ApplicationDependencies:
    return ApplicationDependencies.build(database_service, image_normalizer)


@pytest.fixture
def client(app_dependencies: ApplicationDependencies) -> Generator[TestClient]:
    """TestClient over the real app, wired to the per-test database."""
    from src.catalog.api.http.app import app

    app.state.app_dependencies = app_dependencies
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        del app.state.app_dependencies
