"""FastAPI dependencies for services and settings."""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from grocery_list.config import Settings
from grocery_list.database import get_db
from grocery_list.services.categories import CategoryService
from grocery_list.services.entries import EntryService


def get_app_settings(request: Request) -> Settings:
    """Settings resolved once at startup and attached to the app."""
    return request.app.state.settings


def get_category_service(
    db: Annotated[Session, Depends(get_db)],
) -> CategoryService:
    """Get category service with dependencies."""
    return CategoryService(db)


def get_entry_service(
    db: Annotated[Session, Depends(get_db)],
) -> EntryService:
    """Get entry service with dependencies."""
    return EntryService(db)
