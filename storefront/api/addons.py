"""Category add-on API endpoints"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException

from storefront.api.auth import require_admin
from storefront.models.catalog import Category, CategoryAddon
from storefront.schemas.auth import CurrentUser
from storefront.schemas.catalog import AddonCreate, AddonUpdate, AddonResponse
from storefront.store import CatalogStore, get_store

router = APIRouter()


@router.get("", response_model=List[AddonResponse])
async def list_addons(
    category_id: UUID,
    store: CatalogStore = Depends(get_store),
):
    """Active add-ons offered for a category"""
    return await store.list(
        CategoryAddon,
        filters={"category_id": category_id, "is_active": True},
        order_by=("sort_order",),
    )


@router.get("/all", response_model=List[AddonResponse])
async def list_all_addons(
    category_id: Optional[UUID] = None,
    current_user: CurrentUser = Depends(require_admin),
    store: CatalogStore = Depends(get_store),
):
    """Every add-on, grouped by category"""
    filters = {"category_id": category_id} if category_id else None
    return await store.list(CategoryAddon, filters=filters, order_by=("category_id", "sort_order"))


@router.post("", response_model=AddonResponse, status_code=201)
async def create_addon(
    addon_data: AddonCreate,
    current_user: CurrentUser = Depends(require_admin),
    store: CatalogStore = Depends(get_store),
):
    """Create an add-on"""
    if not await store.get(Category, addon_data.category_id):
        raise HTTPException(status_code=400, detail="Category not found")
    
    return await store.create(CategoryAddon, addon_data.model_dump())


@router.put("/{addon_id}", response_model=AddonResponse)
async def update_addon(
    addon_id: UUID,
    addon_data: AddonUpdate,
    current_user: CurrentUser = Depends(require_admin),
    store: CatalogStore = Depends(get_store),
):
    """Update an add-on"""
    addon = await store.update(CategoryAddon, addon_id, addon_data.model_dump(exclude_unset=True))
    
    if not addon:
        raise HTTPException(status_code=404, detail="Add-on not found")
    
    return addon


@router.delete("/{addon_id}", status_code=204)
async def delete_addon(
    addon_id: UUID,
    current_user: CurrentUser = Depends(require_admin),
    store: CatalogStore = Depends(get_store),
):
    """Delete an add-on"""
    if not await store.delete(CategoryAddon, addon_id):
        raise HTTPException(status_code=404, detail="Add-on not found")
