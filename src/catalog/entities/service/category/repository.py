"""Category repository."""

from collections.abc import Iterable

from sqlalchemy.orm import defer
from sqlmodel import Session, select

from src.catalog.entities.service.category.entity import Category
from src.catalog.entities.service.category.table import CategoryTable


class CategoryRepository:
    """Data-access layer for categories."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def create(self, name: str, image: bytes | None = None) -> Category:
        row = CategoryTable(name=name, image=image)
        self._session.add(row)
        self._session.flush()
        return Category.model_validate(row, from_attributes=True)

    def exists(self, category_id: str) -> bool:
        statement = select(CategoryTable.id).where(CategoryTable.id == category_id)
        return self._session.exec(statement).first() is not None

    def find_existing_ids(self, category_ids: Iterable[str]) -> list[str]:
        """Return the subset of ``category_ids`` that resolve to stored rows."""
        statement = select(CategoryTable.id).where(CategoryTable.id.in_(list(category_ids)))
        return list(self._session.exec(statement).all())

    def get_image(self, category_id: str) -> bytes | None:
        statement = select(CategoryTable.image).where(CategoryTable.id == category_id)
        return self._session.exec(statement).first()

    def list_all(self) -> list[Category]:
        statement = (
            select(CategoryTable)
            .options(defer(CategoryTable.image))
            .order_by(CategoryTable.name, CategoryTable.id)
        )
        return [
            Category.model_validate(row, from_attributes=True)
            for row in self._session.exec(statement).all()
        ]
