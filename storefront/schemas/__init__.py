"""Pydantic schemas for request/response validation"""

from storefront.schemas.auth import (
    TokenPayload,
    CurrentUser,
    BootstrapAdminResponse,
)
from storefront.schemas.catalog import (
    CategoryCreate,
    CategoryUpdate,
    CategoryResponse,
    VariationCreate,
    VariationUpdate,
    VariationResponse,
    PromotionCreate,
    PromotionUpdate,
    PromotionResponse,
    ProductCreate,
    ProductUpdate,
    ProductResponse,
    AddonCreate,
    AddonUpdate,
    AddonResponse,
)
from storefront.schemas.order import (
    OrderType,
    PaymentMethod,
    OrderStatus,
    CustomerInfo,
    PaymentInfo,
    CheckoutLine,
    CheckoutRequest,
    CheckoutPreviewResponse,
    CheckoutResponse,
    OrderResponse,
    OrderListResponse,
    OrderStatusUpdate,
    OrderNotificationResponse,
)
from storefront.schemas.settings import (
    SettingsUpdate,
    SettingsResponse,
    StoreStatusResponse,
)

__all__ = [
    "TokenPayload",
    "CurrentUser",
    "BootstrapAdminResponse",
    "CategoryCreate",
    "CategoryUpdate",
    "CategoryResponse",
    "VariationCreate",
    "VariationUpdate",
    "VariationResponse",
    "PromotionCreate",
    "PromotionUpdate",
    "PromotionResponse",
    "ProductCreate",
    "ProductUpdate",
    "ProductResponse",
    "AddonCreate",
    "AddonUpdate",
    "AddonResponse",
    "OrderType",
    "PaymentMethod",
    "OrderStatus",
    "CustomerInfo",
    "PaymentInfo",
    "CheckoutLine",
    "CheckoutRequest",
    "CheckoutPreviewResponse",
    "CheckoutResponse",
    "OrderResponse",
    "OrderListResponse",
    "OrderStatusUpdate",
    "OrderNotificationResponse",
    "SettingsUpdate",
    "SettingsResponse",
    "StoreStatusResponse",
]
