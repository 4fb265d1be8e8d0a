"""Category schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CategoryCreate(BaseModel):
    """Create a new category."""

    name: str = Field(..., max_length=255)


class CategoryUpdate(BaseModel):
    """Update a category."""

    name: str | None = Field(None, max_length=255)
    position: int | None = None


class CategoryResponse(BaseModel):
    """Category response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    position: int
    created_at: datetime
    updated_at: datetime
