"""Transactional create, edit and delete of products with their categories and variants."""

from collections.abc import Sequence

from loguru import logger
from sqlmodel import Session

from src.catalog.core.errors import InvalidInputError, InvalidReferenceError, NotFoundError
from src.catalog.core.models.catalog import (
    FieldPresence,
    ProductCreateInput,
    ProductEditInput,
    VariantInput,
)
from src.catalog.core.services.catalog.variant_reconciler import reconcile
from src.catalog.core.services.database.db_session import SERIALIZABLE, DbSessionService
from src.catalog.core.services.image.image_normalizer import ImageNormalizerService
from src.catalog.entities.service.category.repository import CategoryRepository
from src.catalog.entities.service.product.entity import ProductDetail
from src.catalog.entities.service.product.repository import ProductRepository
from src.catalog.entities.service.variant.repository import VariantRepository


def link_categories(session: Session, product_id: str, category_ids: Sequence[str]) -> None:
    """Replace the product's categories after checking every id resolves.

    The check compares how many rows were found with how many ids were
    supplied, so an unknown or repeated id rejects the whole set.
    """
    found = CategoryRepository(session).find_existing_ids(category_ids)
    if len(found) != len(category_ids):
        raise InvalidReferenceError("invalid categoryId")
    ProductRepository(session).set_categories(product_id, category_ids)


class ProductMutationService:
    """Coordinates every product write as one atomic unit of work.

    Each operation validates its input first, then runs all of its statements
    through one session from ``DbSessionService.transaction``; any error rolls
    the whole operation back.
    """

    def __init__(
        self,
        database_service: DbSessionService,
        image_normalizer: ImageNormalizerService,
    ):
        self._database = database_service
        self._image_normalizer = image_normalizer

    def create_product(self, data: ProductCreateInput) -> ProductDetail:
        values = data.product_values()
        if data.image is not None:
            values["image"] = self._image_normalizer.normalize(data.image)

        with self._database.transaction() as session:
            products = ProductRepository(session)
            product = products.create(values)

            if data.category_ids:
                link_categories(session, product.id, data.category_ids)

            if data.variants:
                created = VariantRepository(session).bulk_create(
                    [variant.values() for variant in data.variants]
                )
                products.set_variants(product.id, [variant.id for variant in created])

            detail = products.load_detail(product.id, include_vouchers=False)

        logger.info(
            "Product {} created with {} categories and {} variants",
            product.id,
            len(detail.categories),
            len(detail.variants),
        )
        return detail

    def edit_product(self, product_id: str, data: ProductEditInput) -> ProductDetail:
        if data.is_empty():
            raise InvalidInputError("no data provided")

        values = data.product_values()
        if data.image is not None:
            values["image"] = self._image_normalizer.normalize(data.image)

        # Serializable: the variant step reads the current set and then writes
        # based on it, which must not interleave with another edit.
        with self._database.transaction(isolation_level=SERIALIZABLE) as session:
            products = ProductRepository(session)
            if products.update_fields(product_id, values) == 0:
                raise NotFoundError("product not found")

            if data.presence("category_ids") is FieldPresence.PRESENT:
                link_categories(session, product_id, data.category_ids)

            if data.presence("variants") is FieldPresence.PRESENT:
                self._apply_variants(session, product_id, data.variants)

            detail = products.load_detail(product_id)

        logger.info("Product {} updated", product_id)
        return detail

    def _apply_variants(
        self, session: Session, product_id: str, desired: Sequence[VariantInput]
    ) -> None:
        variants = VariantRepository(session)
        plan = reconcile(variants.list_by_product(product_id), desired)

        for variant in plan.to_delete:
            variants.delete(variant.id)

        for update in plan.to_update:
            changes = update.desired.changed_values()
            if variants.update(update.current.id, product_id, changes) == 0:
                raise InvalidReferenceError("invalid variant id")

        created = variants.bulk_create([item.values() for item in plan.to_create])
        ProductRepository(session).add_variants(product_id, [variant.id for variant in created])

        logger.debug(
            "Product {} variants: {} created, {} updated, {} deleted",
            product_id,
            len(plan.to_create),
            len(plan.to_update),
            len(plan.to_delete),
        )

    def delete_product(self, product_id: str) -> None:
        with self._database.transaction() as session:
            if ProductRepository(session).delete(product_id) == 0:
                raise NotFoundError("product not found")
        logger.info("Product {} deleted", product_id)
