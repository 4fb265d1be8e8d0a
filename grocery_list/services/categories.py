"""Category service: CRUD, ordering and name suggestions."""

import logging
from typing import Any

from sqlalchemy.orm import Session

from grocery_list.database import begin_write
from grocery_list.exceptions import NotFoundError
from grocery_list.models.category import Category
from grocery_list.services.matching import clean_name, rank_matches
from grocery_list.services.positions import apply_order, place, renumber

logger = logging.getLogger(__name__)


class CategoryService:
    """Service for category operations.

    Category positions are global and always form 0..n-1. Deleting a category
    deletes its entries as well (ON DELETE CASCADE).
    """

    def __init__(self, db: Session):
        self.db = db

    def _ordered(self) -> list[Category]:
        return self.db.query(Category).order_by(Category.position, Category.id).all()

    def get(self, category_id: int) -> Category:
        category = self.db.query(Category).filter(Category.id == category_id).first()
        if not category:
            raise NotFoundError(f"Category {category_id} not found")
        return category

    def list_all(self) -> list[Category]:
        return self._ordered()

    def create(self, name: str) -> Category:
        """Create a category at the end of the list."""
        name = clean_name(name, "Category")
        begin_write(self.db)
        category = Category(
            name=name,
            position=self.db.query(Category).count(),
        )
        self.db.add(category)
        self.db.commit()
        self.db.refresh(category)

        logger.info(f"Created category {category.id} '{category.name}' at {category.position}")
        return category

    def update(self, category_id: int, fields: dict[str, Any]) -> Category:
        """Rename and/or move a category. ``fields`` holds only what the client sent."""
        begin_write(self.db)
        category = self.get(category_id)

        if fields.get("name") is not None:
            category.name = clean_name(fields["name"], "Category")
        if fields.get("position") is not None:
            place(self._ordered(), category, fields["position"])

        self.db.commit()
        self.db.refresh(category)
        return category

    def delete(self, category_id: int) -> None:
        """Delete a category together with its entries, then close the gap."""
        begin_write(self.db)
        category = self.get(category_id)

        self.db.delete(category)
        self.db.flush()
        renumber(self._ordered())
        self.db.commit()

        logger.info(f"Deleted category {category_id} and its entries")

    def reorder(self, category_ids: list[int]) -> list[Category]:
        """Put the given categories first, in the given order, in one transaction."""
        begin_write(self.db)
        apply_order(self._ordered(), category_ids, "category")
        self.db.commit()
        return self._ordered()

    def suggestions(self, query: str) -> list[str]:
        needle = query.strip()
        if not needle:
            return []

        # Filtered in Python: SQLite only case-folds ASCII
        rows = self.db.query(Category.name).order_by(Category.position, Category.id).all()
        return rank_matches((name for (name,) in rows), needle)
