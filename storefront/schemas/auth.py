"""Auth schemas"""

from typing import Optional
from uuid import UUID
from pydantic import BaseModel


class TokenPayload(BaseModel):
    """Claims we read from the identity provider's access token"""
    sub: UUID
    email: Optional[str] = None
    role: Optional[str] = None
    exp: Optional[int] = None


class CurrentUser(BaseModel):
    """Authenticated caller"""
    user_id: UUID
    email: Optional[str] = None
    is_admin: bool = False


class BootstrapAdminResponse(BaseModel):
    """First-admin bootstrap result"""
    success: bool
    message: str
