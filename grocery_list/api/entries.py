"""Entry API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from grocery_list.api.dependencies import get_entry_service
from grocery_list.schemas.entry import EntryCreate, EntryResponse, EntryUpdate
from grocery_list.services.entries import EntryService

router = APIRouter(prefix="/api/entries", tags=["entries"])


@router.get("", response_model=list[EntryResponse])
def get_entries(
    service: Annotated[EntryService, Depends(get_entry_service)],
    include_completed: bool = Query(default=True, description="Include completed entries"),
):
    """Get all entries, grouped by category order."""
    return service.list_all(include_completed=include_completed)


@router.post("", response_model=EntryResponse, status_code=status.HTTP_201_CREATED)
def create_entry(
    entry_data: EntryCreate,
    service: Annotated[EntryService, Depends(get_entry_service)],
):
    """Create a new entry at the end of its category (or at the given position)."""
    return service.create(
        name=entry_data.name,
        quantity=entry_data.quantity,
        notes=entry_data.notes,
        category_id=entry_data.category_id,
        position=entry_data.position,
    )


@router.put("/reorder", response_model=list[EntryResponse])
def reorder_entries(
    entry_ids: list[int],
    service: Annotated[EntryService, Depends(get_entry_service)],
):
    """Assign positions within one category following the given list of entry ids."""
    return service.reorder(entry_ids)


@router.get("/suggestions", response_model=list[str])
def get_suggestions(
    service: Annotated[EntryService, Depends(get_entry_service)],
    q: str | None = Query(default=None, description="Text typed so far"),
    query: str | None = Query(default=None, include_in_schema=False),
):
    """Previously used entry names matching the query, for autocomplete."""
    return service.suggestions(q if q is not None else query or "")


@router.put("/{entry_id}", response_model=EntryResponse)
def update_entry(
    entry_id: int,
    entry_data: EntryUpdate,
    service: Annotated[EntryService, Depends(get_entry_service)],
):
    """Update an entry's fields, completion state, category or position."""
    return service.update(entry_id, entry_data.model_dump(exclude_unset=True))


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_entry(
    entry_id: int,
    service: Annotated[EntryService, Depends(get_entry_service)],
):
    """Delete an entry."""
    service.delete(entry_id)
