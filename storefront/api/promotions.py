"""Promotion API endpoints"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException

from storefront.api.auth import require_admin
from storefront.models.catalog import Product, Promotion
from storefront.schemas.auth import CurrentUser
from storefront.schemas.catalog import PromotionCreate, PromotionUpdate, PromotionResponse
from storefront.store import CatalogStore, get_store

router = APIRouter()


@router.get("", response_model=List[PromotionResponse])
async def list_promotions(
    product_id: Optional[UUID] = None,
    current_user: CurrentUser = Depends(require_admin),
    store: CatalogStore = Depends(get_store),
):
    """List promotions, newest first"""
    filters = {"product_id": product_id} if product_id else None
    return await store.list(Promotion, filters=filters, order_by=("-created_at",))


@router.post("", response_model=PromotionResponse, status_code=201)
async def create_promotion(
    promotion_data: PromotionCreate,
    current_user: CurrentUser = Depends(require_admin),
    store: CatalogStore = Depends(get_store),
):
    """Create a promotion; an active one replaces the product's current promotion"""
    if not await store.get(Product, promotion_data.product_id):
        raise HTTPException(status_code=400, detail="Product not found")
    
    data = promotion_data.model_dump(exclude_none=True)
    
    if promotion_data.is_active:
        # At most one active promotion per product
        for current in await store.list(Promotion, filters={"product_id": promotion_data.product_id, "is_active": True}):
            await store.update(Promotion, current.id, {"is_active": False})
    
    return await store.create(Promotion, data)


@router.put("/{promotion_id}", response_model=PromotionResponse)
async def update_promotion(
    promotion_id: UUID,
    promotion_data: PromotionUpdate,
    current_user: CurrentUser = Depends(require_admin),
    store: CatalogStore = Depends(get_store),
):
    """Update a promotion"""
    promotion = await store.get(Promotion, promotion_id)
    
    if not promotion:
        raise HTTPException(status_code=404, detail="Promotion not found")
    
    updates = promotion_data.model_dump(exclude_unset=True)
    
    if updates.get("is_active"):
        for current in await store.list(Promotion, filters={"product_id": promotion.product_id, "is_active": True}):
            if current.id != promotion.id:
                await store.update(Promotion, current.id, {"is_active": False})
    
    return await store.update(Promotion, promotion_id, updates)


@router.delete("/{promotion_id}", status_code=204)
async def delete_promotion(
    promotion_id: UUID,
    current_user: CurrentUser = Depends(require_admin),
    store: CatalogStore = Depends(get_store),
):
    """Delete a promotion"""
    if not await store.delete(Promotion, promotion_id):
        raise HTTPException(status_code=404, detail="Promotion not found")
