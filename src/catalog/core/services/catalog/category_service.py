"""Category administration."""

from loguru import logger

from src.catalog.core.errors import NotFoundError
from src.catalog.core.services.database.db_session import DbSessionService
from src.catalog.core.services.image.image_normalizer import ImageNormalizerService
from src.catalog.entities.service.category.entity import Category
from src.catalog.entities.service.category.repository import CategoryRepository


class CategoryService:
    def __init__(
        self,
        database_service: DbSessionService,
        image_normalizer: ImageNormalizerService,
    ):
        self._database = database_service
        self._image_normalizer = image_normalizer

    def create_category(self, name: str, image: bytes | None = None) -> Category:
        normalized = self._image_normalizer.normalize(image) if image is not None else None
        with self._database.transaction() as session:
            category = CategoryRepository(session).create(name=name, image=normalized)
        logger.info("Category {} created", category.id)
        return category

    def list_categories(self) -> list[Category]:
        with self._database.transaction() as session:
            return CategoryRepository(session).list_all()

    def get_category_image(self, category_id: str) -> bytes:
        with self._database.transaction() as session:
            image = CategoryRepository(session).get_image(category_id)
        if not image:
            raise NotFoundError("category image not found")
        return image
