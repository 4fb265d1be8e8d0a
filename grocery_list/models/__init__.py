"""SQLAlchemy models."""

from grocery_list.models.category import Category
from grocery_list.models.entry import Entry
from grocery_list.models.entry_history import EntryHistory

__all__ = [
    "Category",
    "Entry",
    "EntryHistory",
]
