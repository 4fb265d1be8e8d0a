"""Entry schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class EntryCreate(BaseModel):
    """Create a new entry."""

    name: str = Field(..., max_length=255)
    quantity: str = Field("", max_length=50)
    notes: str = Field("", max_length=2000)
    category_id: int | None = None
    position: int | None = None


class EntryUpdate(BaseModel):
    """Update an entry.

    Only fields present in the request are applied; an explicit
    ``"category_id": null`` moves the entry out of its category.
    """

    name: str | None = Field(None, max_length=255)
    quantity: str | None = Field(None, max_length=50)
    notes: str | None = Field(None, max_length=2000)
    category_id: int | None = None
    completed: bool | None = None
    position: int | None = None


class EntryResponse(BaseModel):
    """Entry response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    quantity: str
    notes: str
    category_id: int | None
    position: int
    completed: bool
    completed_at: datetime | None
    created_at: datetime
    updated_at: datetime
