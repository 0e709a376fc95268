"""Store settings schemas"""

from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, Field, field_validator

TIME_PATTERN = r"^([01]?[0-9]|2[0-3]):[0-5][0-9]$"


def _pad_time(value: Optional[str]) -> Optional[str]:
    # "9:30" -> "09:30" so times compare as strings
    if value is None:
        return value
    hours, minutes = value.split(":")
    return f"{int(hours):02d}:{minutes}"


class SettingsUpdate(BaseModel):
    """Update store settings (admin)"""
    whatsapp_number: Optional[str] = Field(None, min_length=10, max_length=20, pattern=r"^\d+$")
    store_name: Optional[str] = Field(None, max_length=100)
    store_address: Optional[str] = Field(None, max_length=500)
    delivery_fee: Optional[float] = Field(None, ge=0, le=999.99)
    is_open: Optional[bool] = None
    pix_key: Optional[str] = Field(None, max_length=100)
    opening_time: Optional[str] = Field(None, pattern=TIME_PATTERN)
    closing_time: Optional[str] = Field(None, pattern=TIME_PATTERN)
    closed_message: Optional[str] = Field(None, max_length=500)
    maintenance_mode: Optional[bool] = None

    @field_validator("opening_time", "closing_time")
    @classmethod
    def pad_time(cls, value: Optional[str]) -> Optional[str]:
        return _pad_time(value)

    @field_validator("store_name", "store_address", "pix_key", "closed_message")
    @classmethod
    def strip_text(cls, value: Optional[str]) -> Optional[str]:
        return value.strip() if value is not None else value


class SettingsResponse(BaseModel):
    """Store settings"""
    id: Optional[UUID] = None
    whatsapp_number: str
    store_name: str
    store_address: Optional[str] = None
    delivery_fee: float = 0
    is_open: bool = True
    pix_key: Optional[str] = None
    opening_time: str = "00:00"
    closing_time: str = "23:59"
    closed_message: Optional[str] = None
    maintenance_mode: bool = False
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class StoreStatusResponse(BaseModel):
    """Whether ordering is currently allowed"""
    is_open: bool
    reason: str
    closed_message: Optional[str] = None
    opening_time: str
    closing_time: str
    checked_at: str
