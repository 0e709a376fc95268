"""Catalog schemas"""

from datetime import datetime
from typing import Optional, List
from uuid import UUID
from pydantic import BaseModel, Field


class CategoryCreate(BaseModel):
    """Create category request"""
    name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    image_url: Optional[str] = Field(None, max_length=2000)
    sort_order: int = Field(0, ge=0, le=9999)
    is_active: bool = True


class CategoryUpdate(BaseModel):
    """Update category request"""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    image_url: Optional[str] = Field(None, max_length=2000)
    sort_order: Optional[int] = Field(None, ge=0, le=9999)
    is_active: Optional[bool] = None


class CategoryResponse(BaseModel):
    """Category response"""
    id: UUID
    name: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    sort_order: int = 0
    is_active: bool = True

    class Config:
        from_attributes = True


class VariationCreate(BaseModel):
    """Create product variation"""
    name: str = Field(min_length=1, max_length=100)
    price: float = Field(ge=0, le=99999.99)
    sort_order: int = 0
    is_active: bool = True


class VariationUpdate(BaseModel):
    """Update product variation"""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    price: Optional[float] = Field(None, ge=0, le=99999.99)
    sort_order: Optional[int] = None
    is_active: Optional[bool] = None


class VariationResponse(BaseModel):
    """Product variation"""
    id: UUID
    product_id: Optional[UUID] = None
    name: str
    price: float
    sort_order: int = 0
    is_active: bool = True

    class Config:
        from_attributes = True


class PromotionCreate(BaseModel):
    """Create promotion request"""
    product_id: UUID
    discount_percent: float = Field(gt=0, le=100)
    starts_at: Optional[datetime] = None
    ends_at: Optional[datetime] = None
    is_active: bool = True


class PromotionUpdate(BaseModel):
    """Update promotion request"""
    discount_percent: Optional[float] = Field(None, gt=0, le=100)
    starts_at: Optional[datetime] = None
    ends_at: Optional[datetime] = None
    is_active: Optional[bool] = None


class PromotionResponse(BaseModel):
    """Promotion response"""
    id: UUID
    product_id: Optional[UUID] = None
    discount_percent: float
    starts_at: Optional[datetime] = None
    ends_at: Optional[datetime] = None
    is_active: bool = True

    class Config:
        from_attributes = True


class ProductCreate(BaseModel):
    """Create product request"""
    category_id: Optional[UUID] = None
    name: str = Field(min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=1000)
    price: float = Field(ge=0, le=99999.99)
    image_url: Optional[str] = Field(None, max_length=2000)
    is_active: bool = True
    is_featured: bool = False
    variations: List[VariationCreate] = []


class ProductUpdate(BaseModel):
    """Update product request"""
    category_id: Optional[UUID] = None
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=1000)
    price: Optional[float] = Field(None, ge=0, le=99999.99)
    image_url: Optional[str] = Field(None, max_length=2000)
    is_active: Optional[bool] = None
    is_featured: Optional[bool] = None


class ProductResponse(BaseModel):
    """Product with its category, variations and active promotion"""
    id: UUID
    category_id: Optional[UUID] = None
    name: str
    description: Optional[str] = None
    price: float
    image_url: Optional[str] = None
    is_active: bool = True
    is_featured: bool = False
    category: Optional[CategoryResponse] = None
    promotion: Optional[PromotionResponse] = None
    variations: List[VariationResponse] = []

    class Config:
        from_attributes = True


class AddonCreate(BaseModel):
    """Create category add-on"""
    category_id: UUID
    name: str = Field(min_length=1, max_length=100)
    price: float = Field(0, ge=0, le=99999.99)
    is_active: bool = True
    sort_order: int = 0


class AddonUpdate(BaseModel):
    """Update category add-on"""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    price: Optional[float] = Field(None, ge=0, le=99999.99)
    is_active: Optional[bool] = None
    sort_order: Optional[int] = None


class AddonResponse(BaseModel):
    """Category add-on"""
    id: UUID
    category_id: Optional[UUID] = None
    name: str
    price: float
    is_active: bool = True
    sort_order: int = 0

    class Config:
        from_attributes = True
