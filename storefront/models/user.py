"""Role grants for users of the external identity provider"""

import uuid
from datetime import datetime
from sqlalchemy import Column, DateTime, Enum, Uuid, UniqueConstraint
import enum

from storefront.database import Base


class Role(str, enum.Enum):
    """User roles"""
    ADMIN = "admin"


class UserRole(Base):
    """Role granted to an identity provider user"""
    __tablename__ = "user_roles"
    __table_args__ = (UniqueConstraint("user_id", "role"),)
    
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    # Subject of the provider's token, not a local FK
    user_id = Column(Uuid, nullable=False, index=True)
    role = Column(Enum(Role), nullable=False, default=Role.ADMIN)
    created_at = Column(DateTime, default=datetime.utcnow)
