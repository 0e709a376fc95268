"""Database models"""

from storefront.models.catalog import Category, Product, ProductVariation, Promotion, CategoryAddon
from storefront.models.order import Order
from storefront.models.settings import StoreSettings
from storefront.models.user import UserRole, Role

__all__ = [
    "Category",
    "Product",
    "ProductVariation",
    "Promotion",
    "CategoryAddon",
    "Order",
    "StoreSettings",
    "UserRole",
    "Role",
]
