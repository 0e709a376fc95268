"""Order model"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, JSON, Text, Integer, Numeric, Uuid

from storefront.database import Base


class Order(Base):
    """Customer orders placed through checkout"""
    __tablename__ = "orders"
    
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    # Human-facing number, not unique
    order_number = Column(String(20), index=True)
    
    # Customer information
    customer_name = Column(String(100), nullable=False)
    customer_phone = Column(String(20), nullable=False)
    
    # Fulfillment
    order_type = Column(String(20), nullable=False)  # delivery, pickup, table
    table_number = Column(Integer)
    address = Column(String(500))
    address_complement = Column(String(200))
    
    # [{"product": {...}, "variation": {...}, "second_flavor": {...}, "addons": [...], "quantity": 2, ...}, ...]
    items_json = Column(JSON, nullable=False)
    
    # Pricing
    subtotal = Column(Numeric(10, 2, asdecimal=False), nullable=False, default=0)
    delivery_fee = Column(Numeric(10, 2, asdecimal=False), nullable=False, default=0)
    total = Column(Numeric(10, 2, asdecimal=False), nullable=False, default=0)
    
    # Payment (settled out-of-band)
    payment_method = Column(String(20))  # pix, cash, card
    change_for = Column(Numeric(10, 2, asdecimal=False))
    
    # Status
    status = Column(String(20), nullable=False, default="pending", index=True)
    
    notes = Column(Text)
    
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    @property
    def display_number(self) -> str:
        """Number shown to customers and staff"""
        if self.order_number:
            return self.order_number
        return str(self.id)[:8].upper()
