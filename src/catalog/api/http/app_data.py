from dataclasses import dataclass

from src.catalog.core.services import (
    CatalogQueryService,
    CategoryService,
    DbSessionService,
    ImageNormalizerService,
    ProductMutationService,
    VoucherService,
)


@dataclass
class ApplicationDependencies:
    database_service: DbSessionService
    image_normalizer: ImageNormalizerService
    catalog_query_service: CatalogQueryService
    product_mutation_service: ProductMutationService
    category_service: CategoryService
    voucher_service: VoucherService

    @classmethod
    def build(
        cls,
        database_service: DbSessionService | None = None,
        image_normalizer: ImageNormalizerService | None = None,
    ) -> "ApplicationDependencies":
        """Wire every service around one engine and one image normalizer."""
        database_service = database_service or DbSessionService()
        image_normalizer = image_normalizer or ImageNormalizerService()
        return cls(
            database_service=database_service,
            image_normalizer=image_normalizer,
            catalog_query_service=CatalogQueryService(database_service),
            product_mutation_service=ProductMutationService(database_service, image_normalizer),
            category_service=CategoryService(database_service, image_normalizer),
            voucher_service=VoucherService(database_service),
        )
