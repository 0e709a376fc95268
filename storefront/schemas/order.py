"""Order and checkout schemas"""

from datetime import datetime
from typing import Optional, List
from uuid import UUID
import enum

from pydantic import BaseModel, Field


class OrderType(str, enum.Enum):
    """Fulfillment channel"""
    DELIVERY = "delivery"
    PICKUP = "pickup"
    TABLE = "table"


class PaymentMethod(str, enum.Enum):
    """Payment labels, settled out-of-band"""
    PIX = "pix"
    CASH = "cash"
    CARD = "card"


class OrderStatus(str, enum.Enum):
    """Order lifecycle states"""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PREPARING = "preparing"
    READY = "ready"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class CustomerInfo(BaseModel):
    """Who is ordering and where it goes"""
    name: str = Field("", max_length=100)
    phone: str = Field("", max_length=20, pattern=r"^[\d\s\-\(\)\+]*$")
    address: Optional[str] = Field(None, max_length=500)
    address_complement: Optional[str] = Field(None, max_length=200)
    table_number: Optional[int] = Field(None, ge=1, le=999)


class PaymentInfo(BaseModel):
    """Selected payment method"""
    method: PaymentMethod = PaymentMethod.PIX
    need_change: bool = False
    change_amount: Optional[float] = Field(None, ge=0)


class CheckoutLine(BaseModel):
    """Cart line as sent by the storefront"""
    product_id: UUID
    variation_id: Optional[UUID] = None
    second_flavor_id: Optional[UUID] = None
    addon_ids: List[UUID] = []
    quantity: int = Field(1, ge=1)
    notes: Optional[str] = Field(None, max_length=500)


class CheckoutRequest(BaseModel):
    """Checkout request"""
    items: List[CheckoutLine]
    customer: CustomerInfo = CustomerInfo()
    order_type: OrderType = OrderType.DELIVERY
    payment: PaymentInfo = PaymentInfo()
    notes: Optional[str] = Field(None, max_length=1000)
    accepted_terms: bool = False
    # Number shown in a preview, kept so the sent message matches it
    order_number: Optional[str] = Field(None, pattern=r"^\d{6,12}$")


class CartLineResponse(BaseModel):
    """Priced cart line"""
    key: str
    product_id: UUID
    name: str
    variation: Optional[str] = None
    second_flavor: Optional[str] = None
    addons: List[str] = []
    quantity: int
    unit_price: float
    subtotal: float
    notes: Optional[str] = None


class CheckoutPreviewResponse(BaseModel):
    """Cart totals and the message that would be sent"""
    lines: List[CartLineResponse]
    item_count: int
    order_number: str
    subtotal: float
    delivery_fee: float
    total: float
    summary_text: str
    store_open: bool


class OrderResponse(BaseModel):
    """Order response"""
    id: UUID
    order_number: Optional[str] = None
    customer_name: str
    customer_phone: str
    order_type: OrderType
    table_number: Optional[int] = None
    address: Optional[str] = None
    address_complement: Optional[str] = None
    items: List[dict] = Field(default_factory=list, validation_alias="items_json")
    subtotal: float
    delivery_fee: float
    total: float
    payment_method: Optional[PaymentMethod] = None
    change_for: Optional[float] = None
    status: OrderStatus
    notes: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
        populate_by_name = True


class OrderListResponse(BaseModel):
    """Paginated order list"""
    items: List[OrderResponse]
    total: int
    page: int
    page_size: int


class CheckoutResponse(BaseModel):
    """Stored order plus the messaging handoff"""
    order: OrderResponse
    order_number: str
    summary_text: str
    whatsapp_url: str
    pix_receipt_url: Optional[str] = None


class OrderStatusUpdate(BaseModel):
    """Status change request"""
    status: OrderStatus


class OrderNotificationResponse(BaseModel):
    """Customer notification for a status"""
    status: OrderStatus
    label: str
    message: str
    whatsapp_url: Optional[str] = None
