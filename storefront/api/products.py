"""Product and variation API endpoints"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import selectinload

from storefront.api.auth import require_admin
from storefront.models.catalog import Category, Product, ProductVariation
from storefront.schemas.auth import CurrentUser
from storefront.schemas.catalog import (
    CategoryResponse,
    ProductCreate,
    ProductUpdate,
    ProductResponse,
    PromotionResponse,
    VariationCreate,
    VariationUpdate,
    VariationResponse,
)
from storefront.store import CatalogStore, get_store

router = APIRouter()

PRODUCT_OPTIONS = (
    selectinload(Product.category),
    selectinload(Product.variations),
    selectinload(Product.promotions),
)


def product_response(product: Product, include_inactive: bool = False) -> ProductResponse:
    """Product with its category, active promotion and (active) variations"""
    promotion = product.active_promotion
    return ProductResponse(
        id=product.id,
        category_id=product.category_id,
        name=product.name,
        description=product.description,
        price=product.price,
        image_url=product.image_url,
        is_active=product.is_active,
        is_featured=product.is_featured,
        category=CategoryResponse.model_validate(product.category) if product.category else None,
        promotion=PromotionResponse.model_validate(promotion) if promotion else None,
        variations=[
            VariationResponse.model_validate(variation)
            for variation in product.variations
            if include_inactive or variation.is_active
        ],
    )


async def _get_product_or_404(store: CatalogStore, product_id: UUID) -> Product:
    product = await store.get(Product, product_id, options=PRODUCT_OPTIONS)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@router.get("", response_model=List[ProductResponse])
async def list_products(
    category_id: Optional[UUID] = None,
    featured: Optional[bool] = None,
    store: CatalogStore = Depends(get_store),
):
    """Active products, newest first"""
    filters = {"is_active": True}
    if category_id:
        filters["category_id"] = category_id
    if featured is not None:
        filters["is_featured"] = featured
    
    products = await store.list(
        Product,
        filters=filters,
        order_by=("-created_at",),
        options=PRODUCT_OPTIONS,
    )
    return [product_response(product) for product in products]


@router.get("/all", response_model=List[ProductResponse])
async def list_all_products(
    current_user: CurrentUser = Depends(require_admin),
    store: CatalogStore = Depends(get_store),
):
    """Every product, inactive ones and their variations included"""
    products = await store.list(Product, order_by=("-created_at",), options=PRODUCT_OPTIONS)
    return [product_response(product, include_inactive=True) for product in products]


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: UUID,
    store: CatalogStore = Depends(get_store),
):
    """Get a specific product"""
    return product_response(await _get_product_or_404(store, product_id))


@router.post("", response_model=ProductResponse, status_code=201)
async def create_product(
    product_data: ProductCreate,
    current_user: CurrentUser = Depends(require_admin),
    store: CatalogStore = Depends(get_store),
):
    """Create a new product with its variations"""
    if product_data.category_id and not await store.get(Category, product_data.category_id):
        raise HTTPException(status_code=400, detail="Category not found")
    
    data = product_data.model_dump(exclude={"variations"})
    data["variations"] = [ProductVariation(**variation.model_dump()) for variation in product_data.variations]
    product = await store.create(Product, data)
    
    return product_response(await _get_product_or_404(store, product.id), include_inactive=True)


@router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: UUID,
    product_data: ProductUpdate,
    current_user: CurrentUser = Depends(require_admin),
    store: CatalogStore = Depends(get_store),
):
    """Update a product"""
    updates = product_data.model_dump(exclude_unset=True)
    
    if updates.get("category_id") and not await store.get(Category, updates["category_id"]):
        raise HTTPException(status_code=400, detail="Category not found")
    
    product = await store.update(Product, product_id, updates)
    
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    
    return product_response(await _get_product_or_404(store, product_id), include_inactive=True)


@router.delete("/{product_id}", status_code=204)
async def delete_product(
    product_id: UUID,
    current_user: CurrentUser = Depends(require_admin),
    store: CatalogStore = Depends(get_store),
):
    """Delete a product with its variations and promotions"""
    deleted = await store.delete(
        Product,
        product_id,
        options=(selectinload(Product.variations), selectinload(Product.promotions)),
    )
    
    if not deleted:
        raise HTTPException(status_code=404, detail="Product not found")


@router.get("/{product_id}/variations", response_model=List[VariationResponse])
async def list_variations(
    product_id: UUID,
    store: CatalogStore = Depends(get_store),
):
    """Active variations of a product"""
    return await store.list(
        ProductVariation,
        filters={"product_id": product_id, "is_active": True},
        order_by=("sort_order",),
    )


@router.post("/{product_id}/variations", response_model=VariationResponse, status_code=201)
async def create_variation(
    product_id: UUID,
    variation_data: VariationCreate,
    current_user: CurrentUser = Depends(require_admin),
    store: CatalogStore = Depends(get_store),
):
    """Add a variation to a product"""
    if not await store.get(Product, product_id):
        raise HTTPException(status_code=404, detail="Product not found")
    
    return await store.create(ProductVariation, {"product_id": product_id, **variation_data.model_dump()})


@router.put("/{product_id}/variations/{variation_id}", response_model=VariationResponse)
async def update_variation(
    product_id: UUID,
    variation_id: UUID,
    variation_data: VariationUpdate,
    current_user: CurrentUser = Depends(require_admin),
    store: CatalogStore = Depends(get_store),
):
    """Update a variation"""
    variation = await store.get(ProductVariation, variation_id)
    
    if not variation or variation.product_id != product_id:
        raise HTTPException(status_code=404, detail="Variation not found")
    
    return await store.update(ProductVariation, variation_id, variation_data.model_dump(exclude_unset=True))


@router.delete("/{product_id}/variations/{variation_id}", status_code=204)
async def delete_variation(
    product_id: UUID,
    variation_id: UUID,
    current_user: CurrentUser = Depends(require_admin),
    store: CatalogStore = Depends(get_store),
):
    """Delete a variation"""
    variation = await store.get(ProductVariation, variation_id)
    
    if not variation or variation.product_id != product_id:
        raise HTTPException(status_code=404, detail="Variation not found")
    
    await store.delete(ProductVariation, variation_id)
