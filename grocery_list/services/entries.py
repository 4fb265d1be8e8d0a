"""Entry service: CRUD, per-category ordering and name suggestions."""

import logging
from datetime import UTC, datetime
from typing import Any

from sqlalchemy.orm import Query, Session

from grocery_list.database import begin_write
from grocery_list.exceptions import NotFoundError, ValidationError
from grocery_list.models.category import Category
from grocery_list.models.entry import Entry
from grocery_list.models.entry_history import EntryHistory
from grocery_list.services.matching import clean_name, escape_like, rank_matches
from grocery_list.services.positions import apply_order, place, renumber

logger = logging.getLogger(__name__)


class EntryService:
    """Service for grocery entry operations.

    Positions are scoped per category: the entries of one category (or all
    uncategorized entries) hold positions 0..k-1 after every mutation.
    """

    def __init__(self, db: Session):
        self.db = db

    def _scope_query(self, category_id: int | None) -> Query:
        query = self.db.query(Entry)
        if category_id is None:
            query = query.filter(Entry.category_id.is_(None))
        else:
            query = query.filter(Entry.category_id == category_id)
        return query.order_by(Entry.position, Entry.id)

    def _scope(self, category_id: int | None) -> list[Entry]:
        return self._scope_query(category_id).all()

    def _check_category(self, category_id: int | None) -> None:
        if category_id is None:
            return
        exists = self.db.query(Category.id).filter(Category.id == category_id).first()
        if not exists:
            raise ValidationError(f"Category {category_id} does not exist")

    def _record_name(self, name: str) -> None:
        """Remember a name for later suggestions."""
        normalized = name.lower().strip()
        history = (
            self.db.query(EntryHistory).filter(EntryHistory.normalized_name == normalized).first()
        )
        if history:
            history.occurrence_count += 1
            history.name = name
            history.last_used_at = datetime.now(UTC)
        else:
            self.db.add(EntryHistory(normalized_name=normalized, name=name, occurrence_count=1))

    def get(self, entry_id: int) -> Entry:
        entry = self.db.query(Entry).filter(Entry.id == entry_id).first()
        if not entry:
            raise NotFoundError(f"Entry {entry_id} not found")
        return entry

    def list_all(self, include_completed: bool = True) -> list[Entry]:
        """All entries, uncategorized first, then in category order."""
        query = self.db.query(Entry).outerjoin(Category, Entry.category_id == Category.id)
        if not include_completed:
            query = query.filter(Entry.completed_at.is_(None))
        return query.order_by(
            Category.position.is_not(None), Category.position, Entry.position, Entry.id
        ).all()

    def create(
        self,
        name: str,
        quantity: str = "",
        notes: str = "",
        category_id: int | None = None,
        position: int | None = None,
    ) -> Entry:
        """Create an entry at the end of its category, or at ``position`` when given."""
        name = clean_name(name, "Entry")
        begin_write(self.db)
        self._check_category(category_id)

        entry = Entry(
            name=name,
            quantity=quantity,
            notes=notes,
            category_id=category_id,
            position=0,
        )
        self.db.add(entry)
        place(self._scope(category_id), entry, position)
        self._record_name(name)

        self.db.commit()
        self.db.refresh(entry)

        logger.info(f"Created entry {entry.id} '{entry.name}' in category {entry.category_id}")
        return entry

    def update(self, entry_id: int, fields: dict[str, Any]) -> Entry:
        """Apply the fields the client sent.

        A ``category_id`` key (``None`` meaning uncategorized) moves the entry
        to that category; ``position`` moves it within its target category.
        """
        begin_write(self.db)
        entry = self.get(entry_id)

        if fields.get("name") is not None:
            name = clean_name(fields["name"], "Entry")
            if name != entry.name:
                entry.name = name
                self._record_name(name)
        if fields.get("quantity") is not None:
            entry.quantity = fields["quantity"]
        if fields.get("notes") is not None:
            entry.notes = fields["notes"]
        if fields.get("completed") is not None:
            if not fields["completed"]:
                entry.completed_at = None
            elif entry.completed_at is None:
                entry.completed_at = datetime.now(UTC)

        target_category_id = fields.get("category_id", entry.category_id)
        new_position = fields.get("position")
        if target_category_id != entry.category_id:
            self._check_category(target_category_id)
            old_scope = [e for e in self._scope(entry.category_id) if e is not entry]
            entry.category_id = target_category_id
            renumber(old_scope)
            place(self._scope(target_category_id), entry, new_position)
        elif new_position is not None:
            place(self._scope(entry.category_id), entry, new_position)

        self.db.commit()
        self.db.refresh(entry)
        return entry

    def delete(self, entry_id: int) -> None:
        """Delete an entry and close the gap in its category."""
        begin_write(self.db)
        entry = self.get(entry_id)
        category_id = entry.category_id

        self.db.delete(entry)
        self.db.flush()
        renumber(self._scope(category_id))
        self.db.commit()

        logger.info(f"Deleted entry {entry_id}")

    def reorder(self, entry_ids: list[int]) -> list[Entry]:
        """Put the given entries first within their category, in one transaction.

        Raises:
            ValidationError: on duplicate or unknown ids, or ids from different categories.
        """
        if entry_ids:
            begin_write(self.db)
            category_ids = {
                category_id
                for (category_id,) in self.db.query(Entry.category_id)
                .filter(Entry.id.in_(entry_ids))
                .all()
            }
            if len(category_ids) > 1:
                raise ValidationError("Reordered entries must all belong to the same category")
            scope = category_ids.pop() if category_ids else None

            apply_order(self._scope(scope), entry_ids, "entry")
            self.db.commit()

        return self.list_all()

    def suggestions(self, query: str) -> list[str]:
        """Previously used entry names matching ``query``, most used first."""
        needle = query.strip().lower()
        if not needle:
            return []

        rows = (
            self.db.query(EntryHistory.name)
            .filter(EntryHistory.normalized_name.like(f"%{escape_like(needle)}%", escape="\\"))
            .order_by(EntryHistory.occurrence_count.desc(), EntryHistory.name)
            .all()
        )
        return rank_matches((name for (name,) in rows), needle)
