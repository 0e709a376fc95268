"""
Authentication.

Sessions live with the external identity provider; we only verify its
access tokens and keep the admin role grants.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from storefront.config import settings
from storefront.database import get_db
from storefront.models.user import UserRole, Role
from storefront.schemas.auth import TokenPayload, CurrentUser, BootstrapAdminResponse

router = APIRouter()
logger = structlog.get_logger()

bearer_scheme = HTTPBearer(auto_error=False)


def decode_token(token: str) -> TokenPayload:
    """Verify an access token issued by the identity provider"""
    payload = jwt.decode(
        token,
        settings.auth_jwt_secret,
        algorithms=[settings.auth_jwt_algorithm],
        audience=settings.auth_jwt_audience,
    )
    return TokenPayload(**payload)


async def has_admin_role(db: AsyncSession, user_id) -> bool:
    result = await db.execute(
        select(UserRole.id).where(UserRole.user_id == user_id, UserRole.role == Role.ADMIN).limit(1)
    )
    return result.scalar_one_or_none() is not None


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> CurrentUser:
    """Get current authenticated user from token"""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    
    if credentials is None:
        raise credentials_exception
    
    try:
        payload = decode_token(credentials.credentials)
    except (JWTError, ValidationError):
        raise credentials_exception
    
    return CurrentUser(
        user_id=payload.sub,
        email=payload.email,
        is_admin=await has_admin_role(db, payload.sub),
    )


async def require_admin(
    current_user: CurrentUser = Depends(get_current_user),
) -> CurrentUser:
    """Only admins may manage the store"""
    if not current_user.is_admin:
        logger.warning("Admin access denied", user_id=str(current_user.user_id))
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Acesso restrito a administradores",
        )
    return current_user


@router.get("/me", response_model=CurrentUser)
async def get_current_user_info(
    current_user: CurrentUser = Depends(get_current_user),
):
    """Get current user information"""
    return current_user


@router.post("/bootstrap-admin", response_model=BootstrapAdminResponse)
async def bootstrap_admin(
    current_user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Make the caller the first admin; refused once any admin exists"""
    result = await db.execute(select(UserRole.id).where(UserRole.role == Role.ADMIN).limit(1))
    if result.scalar_one_or_none() is not None:
        logger.info("Admin bootstrap refused, admin already exists", user_id=str(current_user.user_id))
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Já existe um administrador configurado. Entre em contato com o administrador atual.",
        )
    
    db.add(UserRole(user_id=current_user.user_id, role=Role.ADMIN))
    await db.commit()
    
    logger.info("Admin role granted", user_id=str(current_user.user_id), email=current_user.email)
    
    return BootstrapAdminResponse(
        success=True,
        message="Você agora é o administrador do sistema!",
    )
