"""Category persistence: list, lookup, create/update with unique names, soft delete."""

import logging
from datetime import datetime, timezone

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import ConflictError, NotFoundError
from app.models import Category
from app.schemas.category import CategoryCreate, CategoryUpdate

logger = logging.getLogger(__name__)


class CategoryStore:
    def __init__(self, session: Session) -> None:
        self.session = session

    def _active(self):
        return self.session.query(Category).filter(Category.deleted_at.is_(None))

    def get(self, category_id: int) -> Category:
        category = self._active().filter(Category.id == category_id).first()
        if category is None:
            raise NotFoundError(f"Category with id {category_id} not found")
        return category

    def list_page(self, offset: int, limit: int) -> tuple[list[Category], int]:
        query = self._active()
        total = query.count()
        categories = query.order_by(Category.id).offset(offset).limit(limit).all()
        return categories, total

    def _ensure_name_free(self, name: str, exclude_id: int | None = None) -> None:
        query = self._active().filter(Category.name == name)
        if exclude_id is not None:
            query = query.filter(Category.id != exclude_id)
        if query.first() is not None:
            raise ConflictError(f'Category "{name}" already exists')

    def _commit(self, name: str) -> None:
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            raise ConflictError(f'Category "{name}" already exists') from e

    def create(self, data: CategoryCreate) -> Category:
        self._ensure_name_free(data.name)
        category = Category(**data.model_dump())
        self.session.add(category)
        self._commit(data.name)
        self.session.refresh(category)
        logger.info("Category created: id=%s name=%s", category.id, category.name)
        return category

    def update(self, category_id: int, data: CategoryUpdate) -> Category:
        category = self.get(category_id)
        changes = data.model_dump(exclude_unset=True)
        if changes.get("name") and changes["name"] != category.name:
            self._ensure_name_free(changes["name"], exclude_id=category.id)
        for field, value in changes.items():
            # Only description may be cleared.
            if value is None and field != "description":
                continue
            setattr(category, field, value)
        self._commit(category.name)
        self.session.refresh(category)
        return category

    def remove(self, category_id: int) -> None:
        category = self.get(category_id)
        category.deleted_at = datetime.now(timezone.utc)
        self.session.commit()
        logger.info("Category soft-deleted: id=%s", category_id)
