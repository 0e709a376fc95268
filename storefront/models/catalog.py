"""Catalog models: categories, products and what hangs off them"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, Integer, Boolean, DateTime, ForeignKey, Numeric, Text, Uuid
from sqlalchemy.orm import relationship

from storefront.database import Base


class Category(Base):
    """Menu sections (Pizzas, Bebidas, ...)"""
    __tablename__ = "categories"
    
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=False)
    description = Column(Text)
    image_url = Column(String(2000))
    sort_order = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    
    # Relationships
    products = relationship("Product", back_populates="category")
    addons = relationship("CategoryAddon", back_populates="category", cascade="all, delete-orphan")


class Product(Base):
    """Products on the menu"""
    __tablename__ = "products"
    
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    # Deleting a category orphans its products
    category_id = Column(Uuid, ForeignKey("categories.id", ondelete="SET NULL"), nullable=True)
    name = Column(String(200), nullable=False)
    description = Column(Text)
    price = Column(Numeric(10, 2, asdecimal=False), nullable=False, default=0)
    image_url = Column(String(2000))
    is_active = Column(Boolean, default=True)
    is_featured = Column(Boolean, default=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    
    # Relationships
    category = relationship("Category", back_populates="products")
    variations = relationship(
        "ProductVariation",
        back_populates="product",
        cascade="all, delete-orphan",
        order_by="ProductVariation.sort_order",
    )
    promotions = relationship("Promotion", back_populates="product", cascade="all, delete-orphan")
    
    @property
    def active_promotion(self):
        """The promotion currently applied to the base price, if any"""
        active = [p for p in self.promotions if p.is_active]
        if not active:
            return None
        return max(active, key=lambda p: p.created_at or datetime.min)


class ProductVariation(Base):
    """Sizes/options of a product, each with its own price"""
    __tablename__ = "product_variations"
    
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    product_id = Column(Uuid, ForeignKey("products.id", ondelete="CASCADE"), nullable=False)
    name = Column(String(100), nullable=False)  # P, M, Grande...
    price = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    sort_order = Column(Integer, default=0)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    
    # Relationships
    product = relationship("Product", back_populates="variations")


class Promotion(Base):
    """Percentage discount on a product's base price"""
    __tablename__ = "promotions"
    
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    product_id = Column(Uuid, ForeignKey("products.id", ondelete="CASCADE"), nullable=False)
    discount_percent = Column(Numeric(5, 2, asdecimal=False), nullable=False)
    # Informational only, eligibility is gated by is_active
    starts_at = Column(DateTime, default=datetime.utcnow)
    ends_at = Column(DateTime)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    
    # Relationships
    product = relationship("Product", back_populates="promotions")


class CategoryAddon(Base):
    """Optional extras offered for every product of a category"""
    __tablename__ = "category_addons"
    
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    category_id = Column(Uuid, ForeignKey("categories.id", ondelete="CASCADE"), nullable=False)
    name = Column(String(100), nullable=False)
    price = Column(Numeric(10, 2, asdecimal=False), nullable=False, default=0)
    is_active = Column(Boolean, default=True)
    sort_order = Column(Integer, default=0)
    created_at = Column(DateTime, default=datetime.utcnow)
    
    # Relationships
    category = relationship("Category", back_populates="addons")
