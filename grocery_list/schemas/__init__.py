"""Pydantic schemas for API requests and responses."""

from grocery_list.schemas.category import CategoryCreate, CategoryResponse, CategoryUpdate
from grocery_list.schemas.entry import EntryCreate, EntryResponse, EntryUpdate

__all__ = [
    "CategoryCreate",
    "CategoryUpdate",
    "CategoryResponse",
    "EntryCreate",
    "EntryUpdate",
    "EntryResponse",
]
