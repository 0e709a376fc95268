"""Category API endpoints"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import selectinload

from storefront.api.auth import require_admin
from storefront.models.catalog import Category
from storefront.schemas.auth import CurrentUser
from storefront.schemas.catalog import CategoryCreate, CategoryUpdate, CategoryResponse
from storefront.store import CatalogStore, get_store

router = APIRouter()


@router.get("", response_model=List[CategoryResponse])
async def list_categories(store: CatalogStore = Depends(get_store)):
    """Active categories in display order"""
    return await store.list(Category, filters={"is_active": True}, order_by=("sort_order", "name"))


@router.get("/all", response_model=List[CategoryResponse])
async def list_all_categories(
    current_user: CurrentUser = Depends(require_admin),
    store: CatalogStore = Depends(get_store),
):
    """Every category, hidden ones included"""
    return await store.list(Category, order_by=("sort_order", "name"))


@router.post("", response_model=CategoryResponse, status_code=201)
async def create_category(
    category_data: CategoryCreate,
    current_user: CurrentUser = Depends(require_admin),
    store: CatalogStore = Depends(get_store),
):
    """Create a new category"""
    return await store.create(Category, category_data.model_dump())


@router.put("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: UUID,
    category_data: CategoryUpdate,
    current_user: CurrentUser = Depends(require_admin),
    store: CatalogStore = Depends(get_store),
):
    """Update a category"""
    category = await store.update(Category, category_id, category_data.model_dump(exclude_unset=True))
    
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    
    return category


@router.delete("/{category_id}", status_code=204)
async def delete_category(
    category_id: UUID,
    current_user: CurrentUser = Depends(require_admin),
    store: CatalogStore = Depends(get_store),
):
    """Delete a category; its products stay, without a category"""
    deleted = await store.delete(
        Category,
        category_id,
        options=(selectinload(Category.products), selectinload(Category.addons)),
    )
    
    if not deleted:
        raise HTTPException(status_code=404, detail="Category not found")
