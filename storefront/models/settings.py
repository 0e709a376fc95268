"""Store settings model"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, Boolean, DateTime, Numeric, Text, Uuid

from storefront.database import Base


class StoreSettings(Base):
    """Store-wide settings, a single row"""
    __tablename__ = "settings"
    
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    whatsapp_number = Column(String(20), nullable=False)
    store_name = Column(String(100), nullable=False)
    store_address = Column(String(500))
    delivery_fee = Column(Numeric(10, 2, asdecimal=False), nullable=False, default=0)
    is_open = Column(Boolean, default=True)
    pix_key = Column(String(100))
    
    # Operating hours, "HH:MM" local time; closing before opening means overnight
    opening_time = Column(String(5), default="00:00")
    closing_time = Column(String(5), default="23:59")
    closed_message = Column(Text)
    maintenance_mode = Column(Boolean, default=False)
    
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
