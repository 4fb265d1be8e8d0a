"""Category API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from grocery_list.api.dependencies import get_category_service
from grocery_list.schemas.category import CategoryCreate, CategoryResponse, CategoryUpdate
from grocery_list.services.categories import CategoryService

router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.get("", response_model=list[CategoryResponse])
def get_categories(service: Annotated[CategoryService, Depends(get_category_service)]):
    """Get all categories in display order."""
    return service.list_all()


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
def create_category(
    category_data: CategoryCreate,
    service: Annotated[CategoryService, Depends(get_category_service)],
):
    """Create a new category at the end of the list."""
    return service.create(category_data.name)


@router.put("/reorder", response_model=list[CategoryResponse])
def reorder_categories(
    category_ids: list[int],
    service: Annotated[CategoryService, Depends(get_category_service)],
):
    """Assign positions following the given list of category ids."""
    return service.reorder(category_ids)


@router.get("/suggestions", response_model=list[str])
def get_suggestions(
    service: Annotated[CategoryService, Depends(get_category_service)],
    q: str = Query(default="", description="Text typed so far"),
):
    """Category names matching the query, for autocomplete."""
    return service.suggestions(q)


@router.put("/{category_id}", response_model=CategoryResponse)
def update_category(
    category_id: int,
    category_data: CategoryUpdate,
    service: Annotated[CategoryService, Depends(get_category_service)],
):
    """Rename or move a category."""
    return service.update(category_id, category_data.model_dump(exclude_unset=True))


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(
    category_id: int,
    service: Annotated[CategoryService, Depends(get_category_service)],
):
    """Delete a category. Entries in the category are deleted with it."""
    service.delete(category_id)
